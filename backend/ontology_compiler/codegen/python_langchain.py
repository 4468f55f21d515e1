import json
import keyword
from typing import List, Set

from ontology_compiler.compiler.identifiers import class_name, source_identifier


MODEL_IMPORTS = """from pydantic import BaseModel, Field
from typing import List, Optional
"""

IMPORTS = "from langchain_core.tools import StructuredTool\n" + MODEL_IMPORTS

PYTHON_TYPES = {
    "string": "str",
    "number": "float",
    "boolean": "bool",
    "array": "List[str]",
    "object": "dict",
}

RESERVED = frozenset(keyword.kwlist) | {"model_config", "model_fields"}

FIELD_PREFIX = "field"


def _literal(text: str) -> str:
    # JSON string escapes are valid Python string escapes
    return json.dumps(text, ensure_ascii=False)


def field_identifier(name: str, taken: Set[str] = frozenset()) -> str:
    """
    Attribute name for a pydantic field: no leading underscore, no
    leading digit. '_id' -> 'id', '2fa_code' -> 'field_2fa_code'.
    """
    value = source_identifier(name).lstrip("_")
    if not value:
        value = FIELD_PREFIX
    elif value[0].isdigit():
        value = f"{FIELD_PREFIX}_{value}"
    if value in RESERVED:
        value += "_"
    while value in taken:
        value += "_"
    return value


def _field_line(attr: str, name: str, prop: dict, required: bool) -> str:
    py_type = PYTHON_TYPES.get(prop.get("type"), "str")

    args = ["..." if required else "None"]
    if attr != name:
        args.append(f"alias={_literal(name)}")
    args.append(f"description={_literal(prop.get('description') or name)}")

    field_type = py_type if required else f"Optional[{py_type}]"
    return f"    {attr}: {field_type} = Field({', '.join(args)})"


def render_input_model(tool: dict) -> tuple:
    """Return (class name, class source) of the tool's args model."""
    func = source_identifier(tool["name"], RESERVED)
    model = source_identifier(class_name(func)) + "Input"
    schema = tool["args_schema"]
    required = set(schema.get("required", []))

    taken: Set[str] = set()
    fields = []
    for prop_name, prop in schema.get("properties", {}).items():
        attr = field_identifier(prop_name, taken)
        taken.add(attr)
        fields.append(_field_line(attr, prop_name, prop, prop_name in required))

    source = f'''class {model}(BaseModel):
    """Input schema for {func}"""
{chr(10).join(fields) or "    pass"}
'''
    return model, source


def _render_tool(tool: dict) -> str:
    name = tool["name"]
    func = source_identifier(name, RESERVED)
    model, model_source = render_input_model(tool)
    # StructuredTool descriptions are single-line
    description = tool["description"].replace("\n", " ")

    return f'''
{model_source}

def {func}_func(**kwargs) -> str:
    {_literal(tool["description"])}
    # Replace with the actual implementation
    return {_literal(f"Executed {name} with ")} + str(kwargs)


{func}_tool = StructuredTool.from_function(
    func={func}_func,
    name={_literal(name)},
    description={_literal(description)},
    args_schema={model},
    return_direct={bool(tool.get("return_direct", False))},
)
'''


def generate_langchain_python(tools: List[dict]) -> str:
    """Render LangChain tool descriptors as an importable Python module."""
    body = "\n".join(_render_tool(tool) for tool in tools)
    tool_list = "\n".join(
        f"    {source_identifier(tool['name'], RESERVED)}_tool," for tool in tools
    )

    return f"{IMPORTS}\n{body}\n\n# All tools list\ntools = [\n{tool_list}\n]\n"
