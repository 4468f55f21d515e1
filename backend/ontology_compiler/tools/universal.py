from dataclasses import dataclass, field
from typing import List, Optional

from ontology_compiler.compiler import identifiers as ids
from ontology_compiler.compiler.schema import request_properties
from ontology_compiler.ir.ontology import Action


@dataclass
class ToolParameter:
    name: str
    type: str
    description: str
    required: bool
    enum: Optional[List[str]] = None


@dataclass
class ToolGovernance:
    permission_tier: Optional[int] = field(default=None, metadata={"key": "permissionTier"})
    requires_human_approval: bool = field(
        default=False, metadata={"key": "requiresHumanApproval"}
    )
    risk_level: Optional[str] = field(default=None, metadata={"key": "riskLevel"})


@dataclass
class ToolMetadata:
    object_name: str = field(metadata={"key": "objectName"})
    action_type: str = field(metadata={"key": "actionType"})
    api_endpoint: Optional[str] = field(default=None, metadata={"key": "apiEndpoint"})


@dataclass
class UniversalToolSpec:
    """
    Canonical, dialect-agnostic tool descriptor.
    Every dialect renderer reads from this, so name, description and
    requiredness cannot drift between dialects.
    """
    name: str
    description: str
    parameters: List[ToolParameter] = field(default_factory=list)
    governance: Optional[ToolGovernance] = None
    metadata: Optional[ToolMetadata] = None


def tool_description(action: Action) -> str:
    impl = action.implementation_layer
    business = action.business_layer
    logic = action.logic_layer
    authored = impl.agent_tool_spec if impl else None

    description = (
        (authored.description if authored else None)
        or (business.description if business else None)
        or action.description
        or action.name
    )

    if logic and logic.preconditions:
        description += f"\n\nPreconditions: {'; '.join(logic.preconditions)}"

    if business and business.trigger_condition:
        description += f"\n\nUse when: {business.trigger_condition}"

    return description


def build_universal_tool(action: Action, object_name: str) -> UniversalToolSpec:
    impl = action.implementation_layer
    authored = impl.agent_tool_spec if impl else None

    properties, required = request_properties(action, dialect="json_schema")
    parameters = [
        ToolParameter(
            name=name,
            type=schema.type,
            description=schema.description or f"{name} parameter",
            required=name in required,
            enum=schema.enum,
        )
        for name, schema in properties.items()
    ]

    governance = None
    if action.governance:
        governance = ToolGovernance(
            permission_tier=action.governance.permission_tier,
            requires_human_approval=action.governance.requires_human_approval,
            risk_level=action.governance.risk_level,
        )

    return UniversalToolSpec(
        name=(authored.name if authored else None) or ids.tool_name(object_name, action.name),
        description=tool_description(action),
        parameters=parameters,
        governance=governance,
        metadata=ToolMetadata(
            object_name=object_name,
            action_type=action.type,
            api_endpoint=impl.api_endpoint if impl else None,
        ),
    )
