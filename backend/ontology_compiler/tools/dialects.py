"""
Tool-spec dialect renderers.

Each renderer is a stateless function from the canonical
UniversalToolSpec to one dialect's JSON shape. Governance is carried as
sidecar metadata where the dialect has a slot for it (LangChain,
universal) and dropped elsewhere; the REST document stays the
authoritative governance record.
"""

import json
import logging
from enum import Enum
from typing import Callable, Dict, List, Union

from ontology_compiler.ir.errors import CompilationError
from ontology_compiler.ir.ontology import Action, OntologyObject
from ontology_compiler.serializers.plain import to_plain
from ontology_compiler.tools.universal import UniversalToolSpec, build_universal_tool

logger = logging.getLogger(__name__)


class ToolFormat(Enum):
    OPENAI = "openai"
    LANGCHAIN = "langchain"
    CLAUDE = "claude"
    MCP = "mcp"
    UNIVERSAL = "universal"


# Dialects that define a slot for governance metadata
METADATA_FORMATS = {ToolFormat.LANGCHAIN, ToolFormat.UNIVERSAL}

# Dialects whose JSON export is wrapped as {"tools": [...]}
WRAPPED_FORMATS = {ToolFormat.LANGCHAIN, ToolFormat.MCP}


def resolve_format(fmt: Union[ToolFormat, str]) -> ToolFormat:
    if isinstance(fmt, ToolFormat):
        return fmt
    try:
        return ToolFormat(fmt.lower())
    except ValueError as exc:
        allowed = ", ".join(f.value for f in ToolFormat)
        raise CompilationError(
            f"Unknown tool format '{fmt}', expected one of: {allowed}"
        ) from exc


def supports_governance(fmt: Union[ToolFormat, str]) -> bool:
    return resolve_format(fmt) in METADATA_FORMATS


# -------------------------
# Shared property builder
# -------------------------

def _properties(spec: UniversalToolSpec, array_items: bool = False, titled: bool = False):
    properties: Dict[str, dict] = {}
    required: List[str] = []

    for param in spec.parameters:
        prop = {}
        if titled:
            prop["title"] = param.name
        prop["type"] = param.type
        prop["description"] = param.description
        if array_items and param.type == "array":
            prop["items"] = {"type": "string"}
        if param.enum:
            prop["enum"] = list(param.enum)

        properties[param.name] = prop
        if param.required:
            required.append(param.name)

    return properties, required


def _object_schema(properties: dict, required: List[str]) -> dict:
    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


# -------------------------
# Dialect renderers
# -------------------------

def to_openai(spec: UniversalToolSpec) -> dict:
    properties, required = _properties(spec, array_items=True)
    return {
        "type": "function",
        "function": {
            "name": spec.name,
            "description": spec.description,
            "parameters": _object_schema(properties, required),
        },
    }


def to_langchain(spec: UniversalToolSpec) -> dict:
    properties, required = _properties(spec, titled=True)
    tool = {
        "name": spec.name,
        "description": spec.description,
        "args_schema": {
            "title": f"{spec.name}_args",
            **_object_schema(properties, required),
        },
        "return_direct": False,
        "verbose": True,
        "tags": [spec.metadata.object_name if spec.metadata else "action"],
    }

    if spec.governance:
        metadata = {
            "permission_tier": spec.governance.permission_tier,
            "requires_human_approval": spec.governance.requires_human_approval,
            "risk_level": spec.governance.risk_level,
        }
        tool["metadata"] = {k: v for k, v in metadata.items() if v is not None}

    return tool


def to_claude(spec: UniversalToolSpec) -> dict:
    properties, required = _properties(spec, array_items=True)
    return {
        "name": spec.name,
        "description": spec.description,
        "input_schema": _object_schema(properties, required),
    }


def to_mcp(spec: UniversalToolSpec) -> dict:
    properties, required = _properties(spec)
    return {
        "name": spec.name,
        "description": spec.description,
        "inputSchema": _object_schema(properties, required),
    }


def to_universal(spec: UniversalToolSpec) -> dict:
    return to_plain(spec)


RENDERERS: Dict[ToolFormat, Callable[[UniversalToolSpec], dict]] = {
    ToolFormat.OPENAI: to_openai,
    ToolFormat.LANGCHAIN: to_langchain,
    ToolFormat.CLAUDE: to_claude,
    ToolFormat.MCP: to_mcp,
    ToolFormat.UNIVERSAL: to_universal,
}


# ============================================================
# PUBLIC ENTRY POINTS
# ============================================================

def generate_tool_spec(
    action: Action,
    object_name: str,
    fmt: Union[ToolFormat, str] = ToolFormat.OPENAI,
) -> dict:
    fmt = resolve_format(fmt)
    spec = build_universal_tool(action, object_name)

    if spec.governance and fmt not in METADATA_FORMATS:
        logger.debug(
            "Governance of %s not representable in %s, dropped", spec.name, fmt.value
        )

    return RENDERERS[fmt](spec)


def generate_object_tool_specs(
    obj: OntologyObject,
    fmt: Union[ToolFormat, str] = ToolFormat.OPENAI,
) -> List[dict]:
    return [generate_tool_spec(action, obj.name, fmt) for action in obj.actions]


def generate_all_tool_specs(
    objects: List[OntologyObject],
    fmt: Union[ToolFormat, str] = ToolFormat.OPENAI,
) -> List[dict]:
    tools: List[dict] = []
    for obj in objects:
        tools.extend(generate_object_tool_specs(obj, fmt))

    logger.info("Generated %d %s tool specs", len(tools), resolve_format(fmt).value)
    return tools


def tools_to_json(tools: List[dict], fmt: Union[ToolFormat, str]) -> str:
    payload = {"tools": tools} if resolve_format(fmt) in WRAPPED_FORMATS else tools
    return json.dumps(payload, indent=2, ensure_ascii=False)
