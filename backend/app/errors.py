"""
Error taxonomy for the extraction pipeline.

Two families:
  - SchemaError: the caller's `format` cannot be compiled. Deterministic, so
    never retried.
  - ModelOutputError: one generation attempt went wrong (transport, bad JSON,
    wrong shape). Retried uniformly; the last one propagates as-is.
"""

from __future__ import annotations

from typing import Any


class SchemaError(ValueError):
    """Base class for `format` descriptions that cannot be translated."""


class UnsupportedSchemaType(SchemaError):
    def __init__(self, type_name: Any):
        super().__init__(f"Unsupported schema type: {type_name}")
        self.type_name = type_name


class MalformedSchema(SchemaError):
    def __init__(self, message: str, path: str = "$"):
        super().__init__(f"{message} (at {path})")
        self.path = path


class SchemaTooDeep(SchemaError):
    def __init__(self, max_depth: int, path: str = "$"):
        super().__init__(f"Schema nesting exceeds max depth {max_depth} (at {path})")
        self.max_depth = max_depth
        self.path = path


class ModelOutputError(Exception):
    kind = "model_output"

    def __init__(self, error: str, raw_text: str = ""):
        super().__init__(f"Model output failure ({self.kind}): {error}")
        self.error = error
        self.raw_text = raw_text


class GenerationFailure(ModelOutputError):
    kind = "generation"


class ParseFailure(ModelOutputError):
    kind = "parse"


class ValidationFailure(ModelOutputError):
    kind = "validation"


def format_exc(e: BaseException) -> str:
    """
    Make failures understandable even when the exception message is empty
    (common for some TimeoutError/CancelledError variants).
    """
    msg = str(e).strip()
    name = type(e).__name__
    return f"{name}: {msg}" if msg else name
