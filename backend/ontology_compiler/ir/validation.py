from dataclasses import dataclass, field
from typing import Iterable, List
from .errors import ValidationError


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)

    @classmethod
    def success(cls):
        return cls(is_valid=True)

    @classmethod
    def failure(cls, errors: List[ValidationError]):
        return cls(is_valid=False, errors=errors)

    @classmethod
    def combine(cls, results: Iterable["ValidationResult"]):
        errors = [error for result in results for error in result.errors]
        return cls.failure(errors) if errors else cls.success()

    def errors_at(self, level: str) -> List[ValidationError]:
        return [error for error in self.errors if error.level == level]
