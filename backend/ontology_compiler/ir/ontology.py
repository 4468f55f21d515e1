from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .validation import ValidationResult


# ---- Base ----

class OntologyModel(BaseModel):
    # Editor documents use camelCase keys; snake_case is accepted too
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ---- Action layers ----

class ActionParameter(OntologyModel):
    name: str
    type: str = "string"  # string, number, boolean, date, object, array
    required: bool = False
    description: Optional[str] = None


class BusinessLayer(OntologyModel):
    description: Optional[str] = None
    target_object: Optional[str] = None
    executor_role: Optional[str] = None
    trigger_condition: Optional[str] = None


class LogicLayer(OntologyModel):
    preconditions: List[str] = Field(default_factory=list)
    parameters: List[ActionParameter] = Field(default_factory=list)
    postconditions: List[str] = Field(default_factory=list)
    side_effects: List[str] = Field(default_factory=list)

    @field_validator(
        "preconditions", "parameters", "postconditions", "side_effects",
        mode="before",
    )
    @classmethod
    def coerce_missing_lists(cls, value):
        return [] if value is None else value


class AgentToolSpec(OntologyModel):
    name: Optional[str] = None
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)


class ImplementationLayer(OntologyModel):
    api_endpoint: Optional[str] = None
    api_method: Optional[str] = None  # GET, POST, PUT, PATCH, DELETE
    request_payload: Optional[Dict[str, Any]] = None
    agent_tool_spec: Optional[AgentToolSpec] = None


class Governance(OntologyModel):
    permission_tier: Optional[int] = None  # 1 = full auto ... 4 = multi-approve
    requires_human_approval: bool = False
    audit_log: bool = False
    risk_level: Optional[str] = None  # low, medium, high


# ---- Core Concepts ----

class Action(OntologyModel):
    name: str = ""
    type: str = "traditional"  # traditional, generative, ai-assisted, automated
    description: Optional[str] = None

    business_layer: Optional[BusinessLayer] = None
    logic_layer: Optional[LogicLayer] = None
    implementation_layer: Optional[ImplementationLayer] = None
    governance: Optional[Governance] = None

    @property
    def parameters(self) -> List[ActionParameter]:
        return self.logic_layer.parameters if self.logic_layer else []

    def validate_action(self, object_id: str = "") -> ValidationResult:
        errors = []
        if not self.name or not self.name.strip():
            errors.append(
                ValidationError(
                    level="action",
                    message="action name must not be empty",
                    object_id=object_id,
                )
            )

        if errors:
            return ValidationResult.failure(errors)

        return ValidationResult.success()


class Property(OntologyModel):
    name: str
    type: str = "string"
    description: Optional[str] = None
    required: bool = False


class OntologyObject(OntologyModel):
    id: str = ""
    name: str = ""
    description: Optional[str] = None
    properties: List[Property] = Field(default_factory=list)
    actions: List[Action] = Field(default_factory=list)

    @field_validator("properties", "actions", mode="before")
    @classmethod
    def coerce_missing_lists(cls, value):
        return [] if value is None else value

    def validate_object(self) -> ValidationResult:
        results = [action.validate_action(self.id) for action in self.actions]
        if not self.name or not self.name.strip():
            results.insert(0, ValidationResult.failure([
                ValidationError(
                    level="object",
                    message="object name must not be empty",
                    object_id=self.id,
                )
            ]))

        return ValidationResult.combine(results)

    def find_action(self, name: str) -> Optional[Action]:
        return next((a for a in self.actions if a.name == name), None)


# ---- Root document ----

class OntologyDocument(OntologyModel):
    project_name: Optional[str] = None
    objects: List[OntologyObject] = Field(default_factory=list)

    @field_validator("objects", mode="before")
    @classmethod
    def coerce_missing_objects(cls, value):
        return [] if value is None else value

    def objects_with_actions(self) -> List[OntologyObject]:
        return [obj for obj in self.objects if obj.actions]

    def find_object(self, key: str) -> Optional[OntologyObject]:
        """Look an object up by id, falling back to its name."""
        for obj in self.objects:
            if obj.id == key:
                return obj
        return next((obj for obj in self.objects if obj.name == key), None)
