"""
Translate the loose `format` notation into a runtime validator.

Input notation (what callers send):
  - {"type": "string" | "number" | "boolean"}      -> primitive leaf
  - {"type": "array", "items": <node>}             -> array of <node>
  - {"<field>": <node>, ...}  (no "type" key)      -> object with those fields

Two steps:
  1) parse_schema_node(): loose JSON -> SchemaNode (tagged variant)
  2) build_annotation(): SchemaNode -> pydantic type, wrapped by CompiledSchema

Leaves and arrays are nullable (a field may be unrecoverable from the text);
objects are not, and every declared key is required.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import (
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    create_model,
)

from app.errors import MalformedSchema, SchemaTooDeep, UnsupportedSchemaType, ValidationFailure
from app.settings import DEFAULT_SCHEMA_MAX_DEPTH


PRIMITIVE_KINDS = ("string", "number", "boolean")


@dataclass(frozen=True)
class PrimitiveNode:
    kind: str


@dataclass(frozen=True)
class ArrayNode:
    items: "SchemaNode"


@dataclass(frozen=True)
class ObjectNode:
    # Insertion order of the caller's mapping is preserved.
    fields: Dict[str, "SchemaNode"]


SchemaNode = Union[PrimitiveNode, ArrayNode, ObjectNode]


def parse_schema_node(
    raw: Any,
    *,
    max_depth: int = DEFAULT_SCHEMA_MAX_DEPTH,
    _depth: int = 0,
    _path: str = "$",
) -> SchemaNode:
    """
    Classify one loose node.

    A mapping with a "type" key is dispatched on that key. A mapping without
    one is an object whose values are nodes themselves. Lists and scalars are
    rejected: there is no sensible default for them.
    """
    if _depth > max_depth:
        raise SchemaTooDeep(max_depth, _path)

    if isinstance(raw, list):
        raise MalformedSchema("array schema must be written as {\"type\": \"array\", \"items\": ...}", _path)
    if not isinstance(raw, dict):
        raise MalformedSchema(f"expected a schema object, got {type(raw).__name__}", _path)

    if "type" not in raw:
        return ObjectNode(
            fields={
                key: parse_schema_node(value, max_depth=max_depth, _depth=_depth + 1, _path=f"{_path}.{key}")
                for key, value in raw.items()
            }
        )

    kind = raw["type"]
    if kind in PRIMITIVE_KINDS:
        return PrimitiveNode(kind=kind)
    if kind == "array":
        if "items" not in raw:
            raise MalformedSchema("array schema requires 'items'", _path)
        items = parse_schema_node(raw["items"], max_depth=max_depth, _depth=_depth + 1, _path=f"{_path}[]")
        return ArrayNode(items=items)
    raise UnsupportedSchemaType(kind)


_PRIMITIVE_TYPES: Dict[str, Any] = {
    "string": StrictStr,
    "number": Union[StrictInt, Annotated[StrictFloat, Field(allow_inf_nan=False)]],
    "boolean": StrictBool,
}


def _model_name(path: str) -> str:
    parts = [p for p in path.replace("[]", ".item").split(".") if p and p != "$"]
    cleaned = "".join(c if c.isalnum() else "_" for c in "_".join(parts))
    return f"Extracted_{cleaned}" if cleaned else "Extracted"


def build_annotation(node: SchemaNode, *, _path: str = "$") -> Any:
    if isinstance(node, PrimitiveNode):
        return Optional[_PRIMITIVE_TYPES[node.kind]]
    if isinstance(node, ArrayNode):
        return Optional[list[build_annotation(node.items, _path=f"{_path}[]")]]

    # Field keys are arbitrary JSON strings, so they travel as aliases on
    # positional attribute names (f0, f1, ...).
    field_defs: Dict[str, Any] = {}
    for i, (key, child) in enumerate(node.fields.items()):
        field_defs[f"f{i}"] = (build_annotation(child, _path=f"{_path}.{key}"), Field(..., alias=key))
    return create_model(_model_name(_path), **field_defs)


def _format_errors(exc: ValidationError, limit: int = 5) -> str:
    parts = []
    for err in exc.errors()[:limit]:
        loc = ".".join(str(x) for x in err.get("loc", ())) or "$"
        parts.append(f"{loc}: {err.get('msg')}")
    more = len(exc.errors()) - limit
    if more > 0:
        parts.append(f"... and {more} more")
    return "; ".join(parts)


class CompiledSchema:
    """Validator compiled from a SchemaNode."""

    def __init__(self, node: SchemaNode):
        self.node = node
        self.annotation = build_annotation(node)
        self._adapter = TypeAdapter(self.annotation)

    def validate(self, value: Any) -> Any:
        """
        Check `value` against the schema and return it as plain JSON data,
        keyed by the caller's original field names. Keys the schema does not
        declare are dropped.
        """
        try:
            parsed = self._adapter.validate_python(value)
        except ValidationError as e:
            raise ValidationFailure(_format_errors(e), raw_text=repr(value)) from e
        return self._adapter.dump_python(parsed, mode="json", by_alias=True)


def translate(raw: Any, *, max_depth: int = DEFAULT_SCHEMA_MAX_DEPTH) -> CompiledSchema:
    node = raw if isinstance(raw, (PrimitiveNode, ArrayNode, ObjectNode)) else parse_schema_node(raw, max_depth=max_depth)
    return CompiledSchema(node)
