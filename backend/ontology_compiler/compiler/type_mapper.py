from typing import Any, Dict


# Declared parameter kind -> OpenAPI primitive shape
OPENAPI_TYPE_MAP: Dict[str, Dict[str, str]] = {
    "string": {"type": "string"},
    "number": {"type": "number", "format": "double"},
    "boolean": {"type": "boolean"},
    "date": {"type": "string", "format": "date-time"},
    "object": {"type": "object"},
    "array": {"type": "array"},
}

# JSON Schema dialects (tool specs) carry no format
JSON_SCHEMA_TYPE_MAP: Dict[str, Dict[str, str]] = {
    kind: {"type": shape["type"]} for kind, shape in OPENAPI_TYPE_MAP.items()
}

# Aliases the editor also produces
KIND_ALIASES = {
    "datetime": "date",
    "timestamp": "date",
}

DEFAULT_KIND = "string"


def normalize_kind(kind: str) -> str:
    key = (kind or "").strip().lower()
    key = KIND_ALIASES.get(key, key)
    return key if key in OPENAPI_TYPE_MAP else DEFAULT_KIND


def is_known_kind(kind: str) -> bool:
    key = (kind or "").strip().lower()
    return KIND_ALIASES.get(key, key) in OPENAPI_TYPE_MAP


def map_parameter_type(kind: str, dialect: str = "openapi") -> Dict[str, str]:
    """Unknown kinds fall back to string; this is a lenient default, not a gate."""
    table = OPENAPI_TYPE_MAP if dialect == "openapi" else JSON_SCHEMA_TYPE_MAP
    return dict(table[normalize_kind(kind)])


def infer_example_type(value: Any) -> str:
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"
