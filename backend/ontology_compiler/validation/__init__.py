"""
Validation module for ontology documents fed to the compiler.
"""

from ontology_compiler.validation.ontology_validator import (
    OntologyValidationResult,
    OntologyValidator,
    ValidationIssue,
    ValidationSeverity,
    raise_on_errors,
    validate_ontology,
)

__all__ = [
    "OntologyValidationResult",
    "OntologyValidator",
    "ValidationIssue",
    "ValidationSeverity",
    "raise_on_errors",
    "validate_ontology",
]
