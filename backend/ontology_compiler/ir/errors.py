from dataclasses import dataclass


@dataclass
class ValidationError:
    level: str
    message: str
    object_id: str


class CompilationError(Exception):
    """Base class for failures raised by the interface compiler."""


class IdentifierCollisionError(CompilationError):
    def __init__(self, kind: str, key: str, object_name: str, action_name: str):
        self.kind = kind
        self.key = key
        self.object_name = object_name
        self.action_name = action_name
        super().__init__(
            f"{kind} '{key}' of action '{action_name}' on '{object_name}' "
            f"is already defined by another action"
        )


class OntologyValidationError(CompilationError):
    """Raised by raise_on_errors when the document has error-level issues."""


class ReferenceNotFoundError(CompilationError):
    """An object id or action name that is not in the document."""
