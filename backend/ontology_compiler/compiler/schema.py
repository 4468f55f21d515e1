from typing import Dict, List, Optional, Tuple

from ontology_compiler.compiler.type_mapper import infer_example_type, map_parameter_type
from ontology_compiler.compiler.types import SchemaObject
from ontology_compiler.ir.ontology import Action


def request_properties(
    action: Action,
    dialect: str = "openapi",
) -> Tuple[Dict[str, SchemaObject], List[str]]:
    """
    Union of the logic-layer parameters and the example payload keys.
    Shared by the REST schema and every tool dialect so both stay in sync.
    """
    properties: Dict[str, SchemaObject] = {}
    required: List[str] = []

    for param in action.parameters:
        properties[param.name] = SchemaObject(
            **map_parameter_type(param.type, dialect),
            description=param.description,
        )
        if param.required and param.name not in required:
            required.append(param.name)

    impl = action.implementation_layer
    if impl and impl.request_payload:
        for key, value in impl.request_payload.items():
            if key in properties:
                properties[key] = properties[key].with_example(value)
            else:
                properties[key] = SchemaObject(
                    type=infer_example_type(value),
                    example=value,
                )

    return properties, required


def build_request_schema(action: Action) -> Optional[SchemaObject]:
    properties, required = request_properties(action)

    if not properties:
        return None

    return SchemaObject(
        type="object",
        description=f"Request schema for {action.name}",
        properties=properties,
        required=required or None,
    )


def build_response_schema(action: Action) -> SchemaObject:
    properties: Dict[str, SchemaObject] = {
        "success": SchemaObject(type="boolean", description="Operation success status"),
        "message": SchemaObject(type="string", description="Response message"),
    }

    postconditions = action.logic_layer.postconditions if action.logic_layer else []
    if postconditions:
        properties["changes"] = SchemaObject(
            type="array",
            description="State changes applied",
            items=SchemaObject(type="string"),
            example=list(postconditions),
        )

    return SchemaObject(
        type="object",
        description=f"Response schema for {action.name}",
        properties=properties,
        required=["success"],
    )
