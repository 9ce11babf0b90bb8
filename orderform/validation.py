"""JSON Schema validation engine for the order form.

This module provides the declarative order form schema and a ValidationEngine
that validates form values against it, producing structured FieldError
records with the user-facing messages the schema declares.

The schema is plain Draft 7 JSON Schema plus two annotations that jsonschema
ignores and the engine reads:
- ``trim``: strip surrounding whitespace before validating the property
- ``errorMessages``: user-facing message per rule (``required``,
  ``minLength``, ...), used instead of the generated default

Two entry points share the same rules: ``validate`` checks the whole form
and collects every failure, ``validate_field`` checks a single property.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import jsonschema
from jsonschema import Draft7Validator

from orderform.errors import FieldError
from orderform.types import FULL_NAME, SIZE, TOPPINGS, TOPPINGS_FIELD, FieldErrorCode

logger = logging.getLogger(__name__)


def build_order_form_schema(toppings: Iterable[str] = TOPPINGS) -> Dict[str, Any]:
    """Build the order form schema allowing the given topping catalog.

    Examples:
        >>> schema = build_order_form_schema(["Olives"])
        >>> schema["properties"]["toppings"]["items"]["enum"]
        ['Olives']
    """
    return {
        "type": "object",
        "properties": {
            FULL_NAME: {
                "type": "string",
                "minLength": 3,
                "trim": True,
                "errorMessages": {
                    "required": "full name is required",
                    "minLength": "full name must be at least 3 characters",
                },
            },
            SIZE: {
                "type": "string",
                "minLength": 1,
                "errorMessages": {
                    "required": "size must be S or M or L",
                },
            },
            TOPPINGS_FIELD: {
                "type": "array",
                "items": {"type": "string", "enum": list(toppings)},
                "uniqueItems": True,
            },
        },
        "required": [FULL_NAME, SIZE],
    }


ORDER_FORM_SCHEMA: Dict[str, Any] = build_order_form_schema()


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating form data against the schema.

    Attributes:
        is_valid: Whether the data passed all validation checks
        errors: Field-level validation errors, in schema order (empty if valid)
        data: The validated data, after trimming
        missing_fields: Required fields that are absent or empty
        invalid_fields: Fields that failed any other rule

    Examples:
        >>> engine = ValidationEngine()
        >>> result = engine.validate({'fullName': 'Alice', 'size': 'M', 'toppings': []})
        >>> result.is_valid
        True
        >>> result.errors
        []
    """
    is_valid: bool
    errors: List[FieldError]
    data: Optional[Dict[str, Any]] = None
    missing_fields: List[str] = field(default_factory=list)
    invalid_fields: List[str] = field(default_factory=list)

    def first_error(self, path: str) -> Optional[FieldError]:
        """Return the first error reported for ``path``, if any."""
        for error in self.errors:
            if error.path == path:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "missingFields": self.missing_fields,
            "invalidFields": self.invalid_fields,
        }
        if self.data is not None:
            result["data"] = self.data
        return result


class ValidationEngine:
    """JSON Schema validation engine for the order form.

    Wraps jsonschema and translates its errors into FieldError records with
    the messages declared in the schema's ``errorMessages`` annotations.

    Attributes:
        schema: The JSON Schema definition to validate against
        validator: The underlying jsonschema validator instance

    Examples:
        >>> engine = ValidationEngine()
        >>> result = engine.validate({'fullName': 'Al', 'size': ''})
        >>> [(e.path, e.code.value) for e in result.errors]
        [('fullName', 'too_short'), ('size', 'required')]
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the validation engine.

        Args:
            schema: A Draft 7 JSON Schema for an object; defaults to
                ORDER_FORM_SCHEMA

        Raises:
            jsonschema.SchemaError: If the provided schema is invalid
        """
        self.schema = schema if schema is not None else ORDER_FORM_SCHEMA
        Draft7Validator.check_schema(self.schema)
        self.validator = Draft7Validator(self.schema)
        self.properties: Dict[str, Dict[str, Any]] = self.schema.get("properties", {})
        self.required = set(self.schema.get("required", []))
        self._field_validators = {
            name: Draft7Validator(subschema) for name, subschema in self.properties.items()
        }

    def governs(self, name: str) -> bool:
        """Whether ``name`` is a property of the schema."""
        return name in self.properties

    def normalize(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``data`` with ``trim`` properties stripped."""
        return {name: self._normalize_value(name, value) for name, value in data.items()}

    def _normalize_value(self, name: str, value: Any) -> Any:
        if isinstance(value, str) and self.properties.get(name, {}).get("trim"):
            return value.strip()
        return value

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """Validate the whole form, collecting every failure.

        Args:
            data: Form data as a camelCase dict

        Returns:
            ValidationResult with is_valid flag, errors list, and trimmed data
        """
        data = self.normalize(data)
        errors = [self._translate_error(error) for error in self.validator.iter_errors(data)]
        errors.sort(key=self._field_order)
        return self._build_result(errors, data)

    def validate_field(self, name: str, value: Any) -> ValidationResult:
        """Validate a single property against its own rules.

        Args:
            name: Property name
            value: Raw value for the property

        Returns:
            ValidationResult for that property only

        Raises:
            ValueError: If ``name`` is not a property of the schema
        """
        if not self.governs(name):
            raise ValueError(f"Field '{name}' is not governed by the schema")
        value = self._normalize_value(name, value)
        errors = [
            self._translate_error(error, field_name=name)
            for error in self._field_validators[name].iter_errors(value)
        ]
        return self._build_result(errors, {name: value})

    def validate_field_or_raise(self, name: str, value: Any) -> None:
        """Validate a single property and raise its first failure.

        Raises:
            RequiredError: If a required property is empty
            TooShortError: If the value is under its minimum length
            FieldValidationError: For any other rule failure
        """
        result = self.validate_field(name, value)
        if result.errors:
            raise result.errors[0].to_exception()

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Whether ``data`` satisfies the full schema."""
        return self.validate(data).is_valid

    def _field_order(self, error: FieldError) -> int:
        names = list(self.properties)
        top = error.path.split(".", 1)[0]
        return names.index(top) if top in names else len(names)

    def _build_result(self, errors: List[FieldError], data: Dict[str, Any]) -> ValidationResult:
        missing_fields = [e.path for e in errors if e.code == FieldErrorCode.REQUIRED]
        invalid_fields = [e.path for e in errors if e.code != FieldErrorCode.REQUIRED]
        if errors:
            logger.debug("Validation failed for %s", ", ".join(e.path for e in errors))
        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            data=data,
            missing_fields=missing_fields,
            invalid_fields=invalid_fields,
        )

    def _message(self, name: str, rule: str, default: str) -> str:
        messages = self.properties.get(name, {}).get("errorMessages", {})
        return messages.get(rule, default)

    def _translate_error(self, error: jsonschema.ValidationError, field_name: Optional[str] = None) -> FieldError:
        """Translate a jsonschema ValidationError to a FieldError.

        Error mapping:
            - 'required' property errors -> REQUIRED
            - 'minLength' on an empty required string -> REQUIRED
            - other 'minLength' errors -> TOO_SHORT
            - 'type' errors -> INVALID_TYPE
            - other constraint errors -> INVALID_VALUE
        """
        parts = [field_name] if field_name else []
        parts.extend(str(p) for p in error.path)
        path = ".".join(parts)
        name = parts[0] if parts else ""

        if error.validator == "required":
            missing_prop = error.message.split("'")[1] if "'" in error.message else "field"
            return FieldError(
                path=missing_prop,
                code=FieldErrorCode.REQUIRED,
                message=self._message(missing_prop, "required", f"{missing_prop} is required"),
            )

        if error.validator == "minLength":
            if error.instance == "" and name in self.required:
                return FieldError(
                    path=path,
                    code=FieldErrorCode.REQUIRED,
                    message=self._message(name, "required", f"{name} is required"),
                )
            min_length = error.validator_value
            return FieldError(
                path=path,
                code=FieldErrorCode.TOO_SHORT,
                message=self._message(
                    name, "minLength", f"{name} must be at least {min_length} characters"
                ),
            )

        if error.validator == "type":
            return FieldError(
                path=path,
                code=FieldErrorCode.INVALID_TYPE,
                message=self._message(name, "type", f"{name} must be of type {error.validator_value}"),
            )

        return FieldError(
            path=path,
            code=FieldErrorCode.INVALID_VALUE,
            message=self._message(name, str(error.validator), f"{path} is invalid: {error.message}"),
        )


__all__ = [
    "ORDER_FORM_SCHEMA",
    "build_order_form_schema",
    "ValidationEngine",
    "ValidationResult",
]
