"""
Ontology Validator - Reports compile hazards before artifacts are emitted.

Catches issues like:
- Empty object or action names
- Operation ids / schema names that two actions would both claim
- Two actions on the same path and HTTP method
- Permission tiers outside 1-4
- Parameter kinds the type mapper does not know
- Governance metadata a tool dialect cannot carry
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ontology_compiler.compiler.operation import derive_identifiers
from ontology_compiler.compiler.schema import build_request_schema
from ontology_compiler.compiler.type_mapper import is_known_kind
from ontology_compiler.ir.errors import OntologyValidationError
from ontology_compiler.ir.ontology import Action, OntologyDocument
from ontology_compiler.tools.dialects import ToolFormat, supports_governance
from ontology_compiler.tools.universal import build_universal_tool

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    ERROR = "error"      # Artifact would be unusable
    WARNING = "warning"  # Artifact is produced but loses information
    INFO = "info"        # Expected degradation worth knowing about


@dataclass
class ValidationIssue:
    """A single issue found in the ontology document"""
    severity: ValidationSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    object_name: Optional[str] = None
    action_name: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "object": self.object_name,
            "action": self.action_name,
            "suggestion": self.suggestion,
        }


@dataclass
class OntologyValidationResult:
    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.INFO)

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        status = "Valid" if self.is_valid else "Invalid"
        return (
            f"{status} | Errors: {self.error_count}, "
            f"Warnings: {self.warning_count}, Info: {self.info_count}"
        )


class OntologyValidator:
    """
    Validates an ontology document against the interface compiler's
    identifier and representation rules.

    Usage:
        result = OntologyValidator().validate(document)
        if not result.is_valid:
            for issue in result.issues:
                print(f"[{issue.severity.value}] {issue.message}")
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def validate(self, document: OntologyDocument) -> OntologyValidationResult:
        issues: List[ValidationIssue] = []

        issues.extend(self._check_names(document))

        pairs = [
            (obj.name, action)
            for obj in document.objects
            for action in obj.actions
            if action.name and action.name.strip()
        ]

        issues.extend(self._check_identifier_collisions(pairs))
        issues.extend(self._check_permission_tiers(pairs))
        issues.extend(self._check_parameter_kinds(pairs))
        issues.extend(self._check_governance_support(pairs))

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        has_warnings = any(i.severity == ValidationSeverity.WARNING for i in issues)

        is_valid = not has_errors
        if self.strict_mode:
            is_valid = not has_errors and not has_warnings

        result = OntologyValidationResult(
            is_valid=is_valid,
            issues=issues,
            stats={
                "objects": len(document.objects),
                "objects_with_actions": len(document.objects_with_actions()),
                "actions": sum(len(obj.actions) for obj in document.objects),
            },
        )
        logger.debug("Ontology validation: %s", result.get_summary())
        return result

    def _check_names(self, document: OntologyDocument) -> List[ValidationIssue]:
        issues = []
        for obj in document.objects:
            outcome = obj.validate_object()
            if outcome.is_valid:
                continue

            for _ in outcome.errors_at("object"):
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="EMPTY_OBJECT_NAME",
                    message=f"Object '{obj.id}' has no name",
                    suggestion="Default paths and tags are derived from the object name",
                ))
            for _ in outcome.errors_at("action"):
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="EMPTY_ACTION_NAME",
                    message=f"Object '{obj.name}' has an action without a name",
                    object_name=obj.name,
                    suggestion="Operation ids and schema names are derived from the action name",
                ))
        return issues

    def _check_identifier_collisions(self, pairs: List[Tuple[str, Action]]) -> List[ValidationIssue]:
        issues = []
        owners: Dict[Tuple[str, str], List[str]] = defaultdict(list)

        for object_name, action in pairs:
            identifiers = derive_identifiers(action, object_name)
            owner = f"{object_name}.{action.name}"

            owners[("OPERATION_ID_COLLISION", identifiers.operation_id)].append(owner)
            owners[("PATH_METHOD_COLLISION", f"{identifiers.method.upper()} {identifiers.path}")].append(owner)
            owners[("SCHEMA_COLLISION", identifiers.response_schema)].append(owner)
            if build_request_schema(action) is not None:
                owners[("SCHEMA_COLLISION", identifiers.request_schema)].append(owner)

        for (code, key), claimants in owners.items():
            if len(claimants) < 2:
                continue
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code=code,
                message=f"'{key}' is derived by {len(claimants)} actions: {', '.join(claimants)}",
                suggestion="Rename one of the actions or compile with the 'suffix' collision policy",
            ))
        return issues

    def _check_permission_tiers(self, pairs: List[Tuple[str, Action]]) -> List[ValidationIssue]:
        issues = []
        for object_name, action in pairs:
            tier = action.governance.permission_tier if action.governance else None
            if tier is not None and not 1 <= tier <= 4:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="INVALID_PERMISSION_TIER",
                    message=f"Permission tier {tier} is outside 1-4",
                    object_name=object_name,
                    action_name=action.name,
                    suggestion="Use 1 (full auto) to 4 (multi-approve)",
                ))
        return issues

    def _check_parameter_kinds(self, pairs: List[Tuple[str, Action]]) -> List[ValidationIssue]:
        issues = []
        for object_name, action in pairs:
            for param in action.parameters:
                if not is_known_kind(param.type):
                    issues.append(ValidationIssue(
                        severity=ValidationSeverity.INFO,
                        code="UNKNOWN_PARAMETER_TYPE",
                        message=f"Parameter '{param.name}' has type '{param.type}', emitted as string",
                        object_name=object_name,
                        action_name=action.name,
                    ))
        return issues

    def _check_governance_support(self, pairs: List[Tuple[str, Action]]) -> List[ValidationIssue]:
        issues = []
        dropping = [fmt for fmt in ToolFormat if not supports_governance(fmt)]

        for object_name, action in pairs:
            if not action.governance:
                continue
            name = build_universal_tool(action, object_name).name
            for fmt in dropping:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="GOVERNANCE_DROPPED",
                    message=(
                        f"Tool '{name}' loses its "
                        f"governance metadata in the {fmt.value} dialect"
                    ),
                    object_name=object_name,
                    action_name=action.name,
                    suggestion="The OpenAPI document keeps the governance record",
                ))
        return issues


def validate_ontology(document: OntologyDocument, strict: bool = False) -> OntologyValidationResult:
    """Convenience function to validate a document."""
    return OntologyValidator(strict_mode=strict).validate(document)


def raise_on_errors(document: OntologyDocument) -> None:
    """Validate the document and raise if error-level issues were found."""
    result = validate_ontology(document)
    if not result.is_valid:
        error_messages = [
            f"[{i.code}] {i.message}"
            for i in result.issues
            if i.severity == ValidationSeverity.ERROR
        ]
        raise OntologyValidationError(
            f"Ontology validation failed with {result.error_count} errors:\n"
            + "\n".join(error_messages)
        )
