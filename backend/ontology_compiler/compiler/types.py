from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


# Keys whose JSON name is not a valid Python identifier
REF = {"key": "$ref"}
IN = {"key": "in"}


@dataclass
class SchemaObject:
    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    properties: Optional[Dict[str, "SchemaObject"]] = None
    required: Optional[List[str]] = None
    items: Optional["SchemaObject"] = None
    enum: Optional[List[str]] = None
    example: Any = None
    ref: Optional[str] = field(default=None, metadata=REF)

    def with_example(self, example: Any) -> "SchemaObject":
        return replace(self, example=example)


@dataclass
class Parameter:
    name: str
    location: str = field(default="path", metadata=IN)
    required: bool = True
    description: Optional[str] = None
    schema: SchemaObject = field(default_factory=lambda: SchemaObject(type="string"))


@dataclass
class MediaType:
    schema: SchemaObject
    example: Any = None


@dataclass
class RequestBody:
    required: bool = False
    description: Optional[str] = None
    content: Dict[str, MediaType] = field(default_factory=dict)


@dataclass
class Response:
    description: str
    content: Optional[Dict[str, MediaType]] = None


@dataclass
class Operation:
    summary: str
    description: Optional[str] = None
    operation_id: str = field(default="", metadata={"key": "operationId"})
    tags: Optional[List[str]] = None
    parameters: Optional[List[Parameter]] = None
    request_body: Optional[RequestBody] = field(
        default=None, metadata={"key": "requestBody"}
    )
    responses: Dict[str, Response] = field(default_factory=dict)
    security: Optional[List[Dict[str, List[str]]]] = None


@dataclass
class ActionIdentifiers:
    path: str
    method: str
    operation_id: str
    request_schema: str
    response_schema: str


@dataclass
class ActionFragment:
    """Compiled output of a single action, ready to be folded into a document."""
    object_name: str
    action_name: str
    identifiers: ActionIdentifiers
    operation: Operation
    schemas: Dict[str, SchemaObject] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return self.identifiers.path

    @property
    def method(self) -> str:
        return self.identifiers.method


class CollisionPolicy(Enum):
    OVERWRITE = "overwrite"  # last write wins, reported as a diagnostic
    SUFFIX = "suffix"        # rename colliding identifiers deterministically
    ERROR = "error"          # raise IdentifierCollisionError


@dataclass(frozen=True)
class Collision:
    kind: str  # operation_id | schema | path
    key: str
    object_name: str
    action_name: str
    previous_owner: str
    resolution: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "key": self.key,
            "object": self.object_name,
            "action": self.action_name,
            "previous_owner": self.previous_owner,
            "resolution": self.resolution,
        }


@dataclass(frozen=True)
class ApiDocument:
    """
    Immutable fold value for document assembly.
    Every merge returns a new ApiDocument; the previous value is untouched.
    """
    title: str
    version: str
    description: Optional[str] = None
    tags: List[Dict[str, str]] = field(default_factory=list)
    paths: Dict[str, Dict[str, Operation]] = field(default_factory=dict)
    schemas: Dict[str, SchemaObject] = field(default_factory=dict)
    # identifier -> "Object.Action" that claimed it
    claims: Dict[str, str] = field(default_factory=dict)
    collisions: List[Collision] = field(default_factory=list)
