from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def to_plain(obj: Any):
    """
    Convert compiler output into JSON-compatible structures.
    Deterministic: dict and dataclass field order is preserved.
    Dataclass fields set to None are omitted; field metadata "key"
    overrides the emitted key name ($ref, in, operationId ...).
    """

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, (list, tuple)):
        return [to_plain(item) for item in obj]

    if isinstance(obj, dict):
        return {str(k): to_plain(v) for k, v in obj.items()}

    if is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for f in fields(obj):
            value = getattr(obj, f.name)
            if value is None:
                continue
            result[f.metadata.get("key", f.name)] = to_plain(value)
        return result

    # Pydantic models coming straight from the input document
    if hasattr(obj, "model_dump"):
        return to_plain(obj.model_dump(by_alias=True, exclude_none=True))

    return str(obj)
