"""Tool source-code emitters"""

import ast

import pytest

from ontology_compiler.codegen.python_langchain import (
    MODEL_IMPORTS,
    field_identifier,
    generate_langchain_python,
    render_input_model,
)
from ontology_compiler.codegen.typescript_openai import generate_openai_typescript
from ontology_compiler.ir.ontology import Action
from ontology_compiler.tools.dialects import (
    generate_all_tool_specs,
    generate_object_tool_specs,
    generate_tool_spec,
)


def test_langchain_module(order):
    code = generate_langchain_python(generate_object_tool_specs(order, "langchain"))

    assert code.startswith("from langchain_core.tools import StructuredTool\n")
    assert "class OrderApproveOrderInput(BaseModel):" in code
    assert '    order_id: str = Field(..., description="Order identifier")' in code
    assert '    comment: Optional[str] = Field(None, description="Approval note")' in code
    assert '    priority: Optional[float] = Field(None, description="priority parameter")' in code
    assert "def order_approve_order_func(**kwargs) -> str:" in code
    assert "    # Replace with the actual implementation" in code
    assert "    args_schema=OrderApproveOrderInput," in code
    assert code.rstrip().endswith(
        "tools = [\n"
        "    order_approve_order_tool,\n"
        "    order_list_orders_tool,\n"
        "    order_create_order_tool,\n"
        "]"
    )

    # Must be importable Python
    ast.parse(code)


def test_langchain_module_without_parameters(ontology):
    send = ontology.find_object("Invoice").find_action("Send")
    code = generate_langchain_python([generate_tool_spec(send, "Invoice", "langchain")])

    assert "class InvoiceSendInput(BaseModel):" in code
    assert "    pass" in code
    ast.parse(code)


def test_langchain_escapes_and_aliases():
    action = Action.model_validate({
        "name": "Quote",
        "description": 'Say "hi"\nthen leave',
        "logicLayer": {
            "parameters": [
                {"name": "class", "type": "string", "required": True},
                {"name": "due-date", "type": "date"},
            ]
        },
    })
    code = generate_langchain_python([generate_tool_spec(action, "Order", "langchain")])

    assert '    class_: str = Field(..., alias="class", description="class parameter")' in code
    assert '    due_date: Optional[str] = Field(None, alias="due-date"' in code
    assert 'description="Say \\"hi\\" then leave",' in code
    ast.parse(code)


def test_field_identifier():
    assert field_identifier("order_id") == "order_id"
    assert field_identifier("_id") == "id"
    assert field_identifier("2fa_code") == "field_2fa_code"
    assert field_identifier("__") == "field"
    assert field_identifier("class") == "class_"
    assert field_identifier("_id", {"id"}) == "id_"


def test_input_model_builds_with_underscore_and_digit_names():
    action = Action.model_validate({
        "name": "Lookup",
        "logicLayer": {
            "parameters": [
                {"name": "_id", "type": "string", "required": True},
                {"name": "2fa_code", "type": "string"},
                {"name": "id", "type": "string"},
            ]
        },
    })
    model_name, source = render_input_model(generate_tool_spec(action, "Order", "langchain"))

    assert model_name == "OrderLookupInput"
    assert '    id: str = Field(..., alias="_id", description="_id parameter")' in source
    assert '    field_2fa_code: Optional[str] = Field(None, alias="2fa_code"' in source
    assert '    id_: Optional[str] = Field(None, alias="id"' in source

    namespace = {}
    exec(MODEL_IMPORTS + source, namespace)
    instance = namespace[model_name].model_validate({"_id": "ORD-1", "2fa_code": "123456"})

    assert instance.id == "ORD-1"
    assert instance.field_2fa_code == "123456"
    assert instance.id_ is None


def test_langchain_module_imports(order):
    pytest.importorskip("langchain_core")
    code = generate_langchain_python(generate_object_tool_specs(order, "langchain"))

    namespace = {}
    exec(code, namespace)
    assert [t.name for t in namespace["tools"]] == [
        "order_approve_order",
        "order_list_orders",
        "order_create_order",
    ]


def test_typescript_module(ontology):
    tools = generate_all_tool_specs(ontology.objects_with_actions(), "openai")
    code = generate_openai_typescript(tools)

    assert code.startswith("import OpenAI from 'openai';\n")
    assert "const tools: OpenAI.Chat.Completions.ChatCompletionTool[] = [" in code
    assert (
        "async function order_approve_order(order_id: string, comment: string, "
        "priority: number): Promise<string> {"
    ) in code
    assert "async function invoice_send(): Promise<string> {" in code
    assert '    case "order_approve_order":' in code
    assert (
        '      return await order_approve_order(args["order_id"], '
        'args["comment"], args["priority"]);'
    ) in code
    assert "      return JSON.stringify({ error: 'Unknown tool' });" in code
    assert code.rstrip().endswith("export { client, tools, handleToolCall };")


def test_typescript_embeds_tool_definitions(order):
    tools = generate_object_tool_specs(order, "openai")
    code = generate_openai_typescript(tools)

    assert '"name": "order_create_order"' in code
    assert code.count("    case ") == 3
