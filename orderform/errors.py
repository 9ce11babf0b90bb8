"""Field-scoped error types for the order form.

Validation failures come in two kinds, RequiredError and TooShortError, both
raised as FieldValidationError subclasses by the validation engine. The form
catches them and records them as FieldError entries in a FormErrors mapping,
so they never escape the component.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from orderform.types import FULL_NAME, SIZE, FieldErrorCode


class FieldValidationError(ValueError):
    """Raised when a single field fails one of its validation rules.

    Attributes:
        path: Name of the failing field (e.g., "fullName")
        code: Error code of the failing rule
        message: User-facing message from the schema
    """

    code = FieldErrorCode.INVALID_VALUE

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(message)

    def to_field_error(self) -> "FieldError":
        return FieldError(path=self.path, code=self.code, message=self.message)


class RequiredError(FieldValidationError):
    """The field is empty."""

    code = FieldErrorCode.REQUIRED


class TooShortError(FieldValidationError):
    """The field is shorter than its minimum length."""

    code = FieldErrorCode.TOO_SHORT


ERROR_CLASSES = {
    FieldErrorCode.REQUIRED: RequiredError,
    FieldErrorCode.TOO_SHORT: TooShortError,
}


@dataclass(frozen=True)
class FieldError:
    """Per-field validation error details.

    Attributes:
        path: Field name the error applies to
        code: Specific validation error code
        message: Human-readable error description

    Examples:
        >>> err = FieldError(
        ...     path="fullName",
        ...     code=FieldErrorCode.TOO_SHORT,
        ...     message="full name must be at least 3 characters",
        ... )
        >>> err.to_dict()["code"]
        'too_short'
    """
    path: str
    code: FieldErrorCode
    message: str

    def to_exception(self) -> FieldValidationError:
        """Build the exception matching this error's code."""
        error_class = ERROR_CLASSES.get(self.code, FieldValidationError)
        return error_class(self.path, self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "path": self.path,
            "code": self.code.value if isinstance(self.code, FieldErrorCode) else self.code,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldError":
        """Create FieldError from dict."""
        code = data["code"]
        if isinstance(code, str):
            code = FieldErrorCode(code)
        return cls(path=data["path"], code=code, message=data["message"])


# Fields whose errors are displayed next to their inputs
ERROR_FIELDS = (FULL_NAME, SIZE)


class FormErrors(Dict[str, str]):
    """Mapping from displayed field name to its error message.

    Every displayed field is always present; an empty string means the
    field currently has no error.

    Examples:
        >>> errors = FormErrors()
        >>> errors
        {'fullName': '', 'size': ''}
        >>> errors.has_errors
        False
    """

    def __init__(self, messages: Optional[Dict[str, str]] = None, fields: Iterable[str] = ERROR_FIELDS):
        super().__init__((name, "") for name in fields)
        if messages:
            self.update(messages)

    @classmethod
    def from_field_errors(cls, errors: Iterable[FieldError], fields: Iterable[str] = ERROR_FIELDS) -> "FormErrors":
        """Build FormErrors keeping the first error reported per field.

        Errors on fields that are not displayed are dropped.
        """
        fields = tuple(fields)
        result = cls(fields=fields)
        for error in errors:
            if error.path in fields and not result[error.path]:
                result[error.path] = error.message
        return result

    @property
    def has_errors(self) -> bool:
        return any(self.values())


__all__ = [
    "FieldValidationError",
    "RequiredError",
    "TooShortError",
    "FieldError",
    "FormErrors",
    "ERROR_FIELDS",
]
