"""
Extraction pipeline: translate `format` once, then retry
(prompt -> model -> JSON parse -> validate) until it passes or the budget runs out.
"""

from __future__ import annotations

import json
from typing import Any

from app.errors import ParseFailure
from app.services.generation import GenerationClient
from app.services.prompts import build_prompt
from app.services.retry import DEFAULT_RETRIES, retry
from app.services.schema_translator import CompiledSchema, translate
from app.settings import DEFAULT_SCHEMA_MAX_DEPTH


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; json.loads would accept them otherwise.
    raise ValueError(f"invalid JSON constant: {name}")


def parse_model_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise ParseFailure(str(e), raw_text=text) from e


async def run_attempt(
    input_text: str,
    format: dict[str, Any],
    schema: CompiledSchema,
    client: GenerationClient,
    *,
    debug: bool = False,
) -> Any:
    prompt = build_prompt(input_text, format)
    if debug:
        print(f"[EXTRACT] Prompt:\n{prompt}")
    text = await client.generate_json(prompt)
    return schema.validate(parse_model_json(text))


async def extract(
    input_text: str,
    format: dict[str, Any],
    client: GenerationClient,
    *,
    retries: int = DEFAULT_RETRIES,
    max_depth: int = DEFAULT_SCHEMA_MAX_DEPTH,
    debug: bool = False,
) -> Any:
    """
    Extract data shaped like `format` from `input_text`.

    Schema errors raise before any model call. Model-side failures are retried
    `retries` times; the last one is re-raised unchanged.
    """
    schema = translate(format, max_depth=max_depth)
    return await extract_with_schema(input_text, format, schema, client, retries=retries, debug=debug)


async def extract_with_schema(
    input_text: str,
    format: dict[str, Any],
    schema: CompiledSchema,
    client: GenerationClient,
    *,
    retries: int = DEFAULT_RETRIES,
    debug: bool = False,
) -> Any:
    async def attempt() -> Any:
        return await run_attempt(input_text, format, schema, client, debug=debug)

    result = await retry(retries, attempt)
    print(f"[EXTRACT] Extraction succeeded ({len(input_text)} chars of input)")
    return result
