from __future__ import annotations

import json
import textwrap
from typing import Any


EXTRACTION_INSTRUCTIONS = """\
You are an AI tasked with converting unstructured text data into a structured JSON format based on a provided schema. Your response should be a strictly valid JSON object that matches the schema format described below.

**Instructions:**

1. **Start and End**: Begin your response with an opening curly brace `{` and end with a closing curly brace `}`.
2. **Mapping**: Use the provided `format` to determine the structure of the output JSON. Map the values extracted from the `input` data according to the fields specified in the `format`.
3. **Missing Data**: If a field specified in the `format` cannot be derived from the `input` data, set its value to `null`.
"""

# (input, format, expected output)
WORKED_EXAMPLES: list[tuple[str, dict[str, Any], dict[str, Any]]] = [
    (
        "My name is John and I am 25 years old.",
        {"name": {"type": "string"}, "age": {"type": "number"}},
        {"name": "John", "age": 25},
    ),
    (
        "Contact me at john.doe@example.com.",
        {"email": {"type": "string"}},
        {"email": "john.doe@example.com"},
    ),
    (
        "The event starts on December 12, 2024.",
        {"event_date": {"type": "string"}},
        {"event_date": "December 12, 2024"},
    ),
    (
        "My address is 123 Maple Street.",
        {"street": {"type": "string"}, "city": {"type": "string"}},
        {"street": "123 Maple Street", "city": None},
    ),
    (
        "Alice has a cat named Whiskers.",
        {"name": {"type": "string"}, "pet": {"type": "string"}},
        {"name": "Alice", "pet": "Whiskers"},
    ),
]

OUTPUT_RULES = (
    "**Output:**\n"
    "Your output should be a valid JSON object that precisely matches the structure defined by the `format`. "
    "Ensure there is no additional text, explanation, or content outside the JSON object.\n"
)


def _render_examples() -> str:
    lines = ["**Examples:**"]
    for i, (example_input, example_format, expected) in enumerate(WORKED_EXAMPLES, start=1):
        lines.append(f"{i}. **Example {i}:**")
        lines.append(f"  - `input`: \"{example_input}\"")
        lines.append(f"  - `format`: {json.dumps(example_format, indent=2)}")
        lines.append("  - **Expected Output:**")
        lines.append("    ```json")
        lines.append(textwrap.indent(json.dumps(expected, indent=2), "    "))
        lines.append("    ```")
    return "\n".join(lines) + "\n"


def build_prompt(input_text: str, format: dict[str, Any]) -> str:
    # The input is interpolated raw; the model copes with quoting.
    return (
        f"{EXTRACTION_INSTRUCTIONS}\n"
        f"{_render_examples()}\n"
        "**Input Data:**\n"
        f"- `input`: \"{input_text}\"\n"
        f"- `format`: {json.dumps(format, indent=2, ensure_ascii=False)}\n\n"
        f"{OUTPUT_RULES}"
    )
