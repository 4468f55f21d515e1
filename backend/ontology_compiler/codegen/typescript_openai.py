import json
from typing import List

from ontology_compiler.compiler.identifiers import source_identifier


IMPORTS = """import OpenAI from 'openai';

const client = new OpenAI();
"""

TS_TYPES = {
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    "array": "string[]",
    "object": "Record<string, unknown>",
}

# Words that cannot name a TypeScript function or parameter
RESERVED = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "handleToolCall", "client",
    "tools",
})


def _literal(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _arg_access(name: str) -> str:
    return f"args[{_literal(name)}]"


def _render_handler(tool: dict) -> str:
    function = tool["function"]
    func = source_identifier(function["name"], RESERVED)
    properties = function["parameters"].get("properties", {})

    params = ", ".join(
        f"{source_identifier(name, RESERVED)}: {TS_TYPES.get(prop.get('type'), 'any')}"
        for name, prop in properties.items()
    )
    message = _literal(f"{function['name']} executed")

    return f"""
async function {func}({params}): Promise<string> {{
  // Replace with the actual implementation
  return JSON.stringify({{ success: true, message: {message} }});
}}"""


def _render_case(tool: dict) -> str:
    function = tool["function"]
    func = source_identifier(function["name"], RESERVED)
    args = ", ".join(_arg_access(name) for name in function["parameters"].get("properties", {}))
    return f"    case {_literal(function['name'])}:\n      return await {func}({args});"


def generate_openai_typescript(tools: List[dict]) -> str:
    """Render OpenAI function tools as a TypeScript module with a dispatcher."""
    definitions = json.dumps(tools, indent=2, ensure_ascii=False)
    handlers = "\n".join(_render_handler(tool) for tool in tools)
    cases = "\n".join(_render_case(tool) for tool in tools)

    return f"""{IMPORTS}
// Tool definitions
const tools: OpenAI.Chat.Completions.ChatCompletionTool[] = {definitions};
{handlers}

// Tool call dispatcher
async function handleToolCall(toolCall: OpenAI.Chat.Completions.ChatCompletionMessageToolCall): Promise<string> {{
  const args = JSON.parse(toolCall.function.arguments);

  switch (toolCall.function.name) {{
{cases}
    default:
      return JSON.stringify({{ error: 'Unknown tool' }});
  }}
}}

export {{ client, tools, handleToolCall }};
"""
