import logging
from typing import List, Optional

from ontology_compiler.compiler import identifiers as ids
from ontology_compiler.compiler.schema import build_request_schema, build_response_schema
from ontology_compiler.compiler.types import (
    ActionFragment,
    ActionIdentifiers,
    MediaType,
    Operation,
    Parameter,
    RequestBody,
    Response,
    SchemaObject,
)
from ontology_compiler.ir.ontology import Action

logger = logging.getLogger(__name__)


DEFAULT_METHOD = "post"
READ_METHODS = {"get"}
JSON_MEDIA_TYPE = "application/json"
SECURITY_SCHEME = "bearerAuth"
SECURED_FROM_TIER = 2

ERROR_RESPONSES = {
    "400": "Bad request - validation failed",
    "401": "Unauthorized",
    "403": "Forbidden - insufficient permissions",
    "404": "Resource not found",
}


def schema_ref(name: str) -> SchemaObject:
    return SchemaObject(ref=f"#/components/schemas/{name}")


def _bullets(items: List[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


# ============================================================
# Identifier derivation for one action
# ============================================================

def derive_identifiers(action: Action, object_name: str) -> ActionIdentifiers:
    impl = action.implementation_layer
    return ActionIdentifiers(
        path=(impl.api_endpoint if impl and impl.api_endpoint else None)
        or ids.default_path(object_name, action.name),
        method=((impl.api_method if impl else None) or DEFAULT_METHOD).lower(),
        operation_id=ids.operation_id(action.name),
        request_schema=ids.schema_name(action.name, ids.REQUEST_SUFFIX),
        response_schema=ids.schema_name(action.name, ids.RESPONSE_SUFFIX),
    )


# ============================================================
# Long description
# ============================================================

def governance_line(action: Action) -> Optional[str]:
    governance = action.governance
    if not governance:
        return None

    parts = []
    if governance.permission_tier:
        parts.append(f"Permission Tier: {governance.permission_tier}")
    if governance.risk_level:
        parts.append(f"Risk Level: {governance.risk_level}")
    if governance.requires_human_approval:
        parts.append("Requires Human Approval")
    if governance.audit_log:
        parts.append("Audit Logged")

    return " | ".join(parts) if parts else None


def build_description(action: Action) -> str:
    """
    Fixed order: description, executor role, trigger condition,
    preconditions, postconditions, side effects, governance.
    Only present parts are emitted.
    """
    business = action.business_layer
    logic = action.logic_layer

    parts: List[str] = []

    if action.description:
        parts.append(action.description)

    if business and business.executor_role:
        parts.append(f"\n\n**Executor Role:** {business.executor_role}")

    if business and business.trigger_condition:
        parts.append(f"\n\n**Trigger Condition:** {business.trigger_condition}")

    if logic and logic.preconditions:
        parts.append(f"\n\n**Preconditions:**\n{_bullets(logic.preconditions)}")

    if logic and logic.postconditions:
        parts.append(f"\n\n**Postconditions:**\n{_bullets(logic.postconditions)}")

    if logic and logic.side_effects:
        parts.append(f"\n\n**Side Effects:**\n{_bullets(logic.side_effects)}")

    governance = governance_line(action)
    if governance:
        parts.append(f"\n\n**Governance:** {governance}")

    return "".join(parts)


def build_summary(action: Action) -> str:
    business = action.business_layer
    return (
        (business.description if business else None)
        or action.description
        or action.name
    )


def requires_security(action: Action) -> bool:
    tier = action.governance.permission_tier if action.governance else None
    return bool(tier and tier >= SECURED_FROM_TIER)


# ============================================================
# PUBLIC ENTRY POINT
# ============================================================

def compile_action(
    action: Action,
    object_name: str,
    identifiers: Optional[ActionIdentifiers] = None,
) -> ActionFragment:
    """
    Compile one action into its operation and schemas.
    `identifiers` lets the document assembler pass collision-resolved names.
    """
    identifiers = identifiers or derive_identifiers(action, object_name)

    parameters = [
        Parameter(name=name, description=f"{name} parameter")
        for name in ids.extract_path_params(identifiers.path)
    ]

    responses = {
        "200": Response(
            description="Successful operation",
            content={
                JSON_MEDIA_TYPE: MediaType(schema=schema_ref(identifiers.response_schema))
            },
        )
    }
    for code, description in ERROR_RESPONSES.items():
        responses[code] = Response(description=description)

    operation = Operation(
        summary=build_summary(action),
        description=build_description(action),
        operation_id=identifiers.operation_id,
        tags=[object_name],
        parameters=parameters or None,
        responses=responses,
    )

    schemas = {}
    request_schema = build_request_schema(action)

    if request_schema is not None:
        schemas[identifiers.request_schema] = request_schema

        if identifiers.method not in READ_METHODS:
            operation.request_body = RequestBody(
                required=bool(request_schema.required),
                description=f"Request body for {action.name}",
                content={
                    JSON_MEDIA_TYPE: MediaType(schema=schema_ref(identifiers.request_schema))
                },
            )

    schemas[identifiers.response_schema] = build_response_schema(action)

    if requires_security(action):
        operation.security = [{SECURITY_SCHEME: []}]

    logger.debug(
        "Compiled action %s.%s -> %s %s",
        object_name, action.name, identifiers.method.upper(), identifiers.path,
    )

    return ActionFragment(
        object_name=object_name,
        action_name=action.name,
        identifiers=identifiers,
        operation=operation,
        schemas=schemas,
    )
