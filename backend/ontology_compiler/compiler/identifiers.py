import re
from typing import List


# ============================================================
# Name-derived identifiers
# Pure functions of the authored names: no counters, no UUIDs.
# ============================================================

_SEPARATORS = re.compile(r"[\s-]+")
_PATH_PARAM = re.compile(r"\{([^}]+)\}")

REQUEST_SUFFIX = "Request"
RESPONSE_SUFFIX = "Response"
FALLBACK_TOOL_NAME = "action"


def operation_id(action_name: str) -> str:
    """'Approve Order' -> 'approve_order'"""
    value = _SEPARATORS.sub("_", (action_name or "").lower())
    return re.sub(r"[^a-z0-9_]", "", value)


def schema_name(action_name: str, suffix: str) -> str:
    """'Approve Order' + 'Request' -> 'ApproveOrderRequest'"""
    words = _SEPARATORS.split(action_name or "")
    base = "".join(word[:1].upper() + word[1:].lower() for word in words)
    return base + suffix


def default_path(object_name: str, action_name: str) -> str:
    return f"/api/{(object_name or '').lower()}s/{{id}}/{operation_id(action_name)}"


def extract_path_params(path_template: str) -> List[str]:
    return _PATH_PARAM.findall(path_template or "")


def tool_name(object_name: str, action_name: str) -> str:
    """'Order', 'Approve Order' -> 'order_approve_order'"""
    value = re.sub(r"([A-Z])", r"_\1", f"{object_name}_{action_name}")
    value = _SEPARATORS.sub("_", value.lower())
    value = re.sub(r"[^\w]", "", value)
    value = re.sub(r"_+", "_", value).strip("_")
    return value or FALLBACK_TOOL_NAME


def class_name(snake_name: str) -> str:
    """'order_approve_order' -> 'OrderApproveOrder'"""
    return "".join(word[:1].upper() + word[1:] for word in snake_name.split("_"))


def suffixed(identifier: str, n: int, separator: str = "") -> str:
    """Deterministic collision suffix: approve_order -> approve_order_2"""
    return f"{identifier}{separator}{n}"


def source_identifier(name: str, reserved=frozenset()) -> str:
    """Make a name usable as a Python/TypeScript identifier."""
    value = re.sub(r"\W", "_", name or "") or "_"
    if value[0].isdigit():
        value = "_" + value
    if value in reserved:
        value += "_"
    return value
