from ontology_compiler.compiler.document import (
    compile_action_document,
    compile_full_document,
    compile_object_document,
)
from ontology_compiler.compiler.types import CollisionPolicy

__all__ = [
    "CollisionPolicy",
    "compile_action_document",
    "compile_full_document",
    "compile_object_document",
]
