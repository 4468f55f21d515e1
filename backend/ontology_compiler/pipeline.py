"""
High-level compile entry points: pick a scope (whole document, one
object, one action), build the artifact and serialize it to a string.
"""

import logging
from typing import List, Optional, Tuple, Union

from ontology_compiler.codegen.python_langchain import generate_langchain_python
from ontology_compiler.codegen.typescript_openai import generate_openai_typescript
from ontology_compiler.compiler.document import (
    build_action_document,
    build_full_document,
    build_object_document,
    document_to_dict,
)
from ontology_compiler.compiler.types import ApiDocument
from ontology_compiler.ir.errors import CompilationError, ReferenceNotFoundError
from ontology_compiler.ir.ontology import Action, OntologyDocument, OntologyObject
from ontology_compiler.serializers.json_writer import spec_to_json
from ontology_compiler.serializers.yaml_writer import spec_to_yaml
from ontology_compiler.tools.dialects import (
    ToolFormat,
    generate_all_tool_specs,
    generate_object_tool_specs,
    generate_tool_spec,
    resolve_format,
    tools_to_json,
)

logger = logging.getLogger(__name__)


SCOPES = ("full", "object", "action")
SPEC_FORMATS = ("json", "yaml")
TOOL_OUTPUTS = ("json", "python", "typescript")


def as_document(source: Union[OntologyDocument, dict, List]) -> OntologyDocument:
    if isinstance(source, OntologyDocument):
        return source
    if isinstance(source, list):
        return OntologyDocument(objects=source)
    return OntologyDocument.model_validate(source)


def select_scope(
    document: OntologyDocument,
    scope: str = "full",
    object_id: Optional[str] = None,
    action_name: Optional[str] = None,
) -> Tuple[Optional[OntologyObject], Optional[Action]]:
    if scope not in SCOPES:
        raise CompilationError(f"Unknown scope '{scope}', expected one of {SCOPES}")

    if scope == "full":
        return None, None

    obj = document.find_object(object_id or "")
    if obj is None:
        raise ReferenceNotFoundError(f"Object '{object_id}' not found")

    if scope == "object":
        return obj, None

    action = obj.find_action(action_name or "")
    if action is None:
        raise ReferenceNotFoundError(f"Action '{action_name}' not found on '{obj.name}'")

    return obj, action


# ============================================================
# OpenAPI
# ============================================================

def build_document(
    source,
    scope: str = "full",
    object_id: Optional[str] = None,
    action_name: Optional[str] = None,
    project_name: Optional[str] = None,
    policy=None,
) -> ApiDocument:
    document = as_document(source)
    obj, action = select_scope(document, scope, object_id, action_name)

    if action is not None:
        return build_action_document(action, obj.name, policy)
    if obj is not None:
        return build_object_document(obj, policy)
    return build_full_document(
        document.objects, project_name or document.project_name, policy
    )


def compile_openapi(
    source,
    scope: str = "full",
    object_id: Optional[str] = None,
    action_name: Optional[str] = None,
    fmt: str = "json",
    project_name: Optional[str] = None,
    policy=None,
) -> str:
    if fmt not in SPEC_FORMATS:
        raise CompilationError(f"Unknown spec format '{fmt}', expected one of {SPEC_FORMATS}")

    api_document = build_document(source, scope, object_id, action_name, project_name, policy)
    spec = document_to_dict(api_document)

    return spec_to_json(spec) if fmt == "json" else spec_to_yaml(spec)


# ============================================================
# Tool specs
# ============================================================

def build_tools(
    source,
    fmt: Union[ToolFormat, str] = ToolFormat.OPENAI,
    scope: str = "full",
    object_id: Optional[str] = None,
    action_name: Optional[str] = None,
) -> List[dict]:
    document = as_document(source)
    obj, action = select_scope(document, scope, object_id, action_name)

    if action is not None:
        return [generate_tool_spec(action, obj.name, fmt)]
    if obj is not None:
        return generate_object_tool_specs(obj, fmt)
    return generate_all_tool_specs(document.objects_with_actions(), fmt)


def compile_tools(
    source,
    fmt: Union[ToolFormat, str] = ToolFormat.OPENAI,
    output: str = "json",
    scope: str = "full",
    object_id: Optional[str] = None,
    action_name: Optional[str] = None,
) -> str:
    """
    json: any dialect.
    python: LangChain source, from the openai or langchain dialect.
    typescript: OpenAI source, openai dialect only.
    """
    fmt = resolve_format(fmt)

    if output == "json":
        return tools_to_json(build_tools(source, fmt, scope, object_id, action_name), fmt)

    if output == "python" and fmt in (ToolFormat.OPENAI, ToolFormat.LANGCHAIN):
        tools = build_tools(source, ToolFormat.LANGCHAIN, scope, object_id, action_name)
        return generate_langchain_python(tools)

    if output == "typescript" and fmt is ToolFormat.OPENAI:
        tools = build_tools(source, ToolFormat.OPENAI, scope, object_id, action_name)
        return generate_openai_typescript(tools)

    raise CompilationError(f"Output '{output}' is not available for the {fmt.value} format")
