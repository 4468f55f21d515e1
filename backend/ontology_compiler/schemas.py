from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

from ontology_compiler.ir.ontology import OntologyModel, OntologyObject


Scope = Literal["full", "object", "action"]


class CompileSpecRequest(OntologyModel):
    objects: List[OntologyObject] = Field(default_factory=list)
    project_name: Optional[str] = None
    scope: Scope = "full"
    object_id: Optional[str] = None  # id or name, for object/action scope
    action_name: Optional[str] = None  # for action scope
    format: Literal["json", "yaml"] = "json"
    collision_policy: Optional[Literal["overwrite", "suffix", "error"]] = None


class CompileToolsRequest(OntologyModel):
    objects: List[OntologyObject] = Field(default_factory=list)
    scope: Scope = "full"
    object_id: Optional[str] = None
    action_name: Optional[str] = None
    format: Literal["openai", "langchain", "claude", "mcp", "universal"] = "openai"
    output: Literal["json", "python", "typescript"] = "json"


class ValidateRequest(OntologyModel):
    objects: List[OntologyObject] = Field(default_factory=list)
    strict: bool = False


class CompileSpecResponse(BaseModel):
    status: str
    format: str
    content: str
    diagnostics: List[Dict[str, Any]] = []  # identifier collisions


class CompileToolsResponse(BaseModel):
    status: str
    format: str
    output: str
    content: str
