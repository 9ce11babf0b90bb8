"""OrderFormValidator orchestrator for the pizza order form.

This module provides the OrderFormValidator class that coordinates form
values, the validation engine and the submit gate state machine. It is the
component a display layer talks to: it accepts field changes and submit
attempts, and exposes the current errors, submit enablement and
confirmation message.

Derived state is recomputed synchronously at the end of every handler, so
nothing stale is observable between calls.

Usage:
    >>> from orderform.form import OrderFormValidator
    >>> form = OrderFormValidator()
    >>> form.on_field_change("fullName", "  Alice ")
    >>> form.on_field_change("size", "M")
    >>> form.on_field_change("Ham", "on", is_multi_value=True)
    >>> form.submit_enabled
    True
    >>> print(form.on_submit())
    Thank you for your order, Alice!
    Your medium pizza with 1 topping is on the way!
    >>> form.submit_enabled
    False
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from orderform.confirmation import build_confirmation_message, message_lines
from orderform.errors import FieldValidationError, FormErrors
from orderform.state_machine import SubmitStateMachine, Transition
from orderform.types import FULL_NAME, TOPPINGS, TOPPINGS_FIELD, ChangeEvent, FormValues, SubmitState, Trigger
from orderform.validation import ValidationEngine, build_order_form_schema

logger = logging.getLogger(__name__)


def derive_state(
    values: FormValues,
    fields: Iterable[str],
    engine: ValidationEngine,
) -> Tuple[FormErrors, bool]:
    """Compute the displayed errors and submit enablement for ``values``.

    Args:
        values: Current form values
        fields: Fields whose errors are reported
        engine: Validation engine holding the schema

    Returns:
        (FormErrors with the first failure of each reported field,
         whether the values pass the full schema)

    Examples:
        >>> engine = ValidationEngine()
        >>> errors, enabled = derive_state(FormValues(full_name="Al"), ["fullName"], engine)
        >>> errors["fullName"], errors["size"], enabled
        ('full name must be at least 3 characters', '', False)
    """
    fields = set(fields)
    result = engine.validate(values.to_dict())
    visible = [error for error in result.errors if error.path in fields]
    return FormErrors.from_field_errors(visible), result.is_valid


class OrderFormValidator:
    """Validation state machine behind the order form.

    Attributes:
        engine: Validation engine for the form schema
        toppings: Topping catalog offered by the form

    Examples:
        >>> form = OrderFormValidator()
        >>> form.is_disabled
        True
        >>> form.on_field_change("fullName", "Al")
        >>> form.errors["fullName"]
        'full name must be at least 3 characters'
    """

    def __init__(
        self,
        schema: Optional[Dict[str, Any]] = None,
        toppings: Iterable[str] = TOPPINGS,
    ):
        """Initialize the form with empty values and a disabled submit.

        Args:
            schema: JSON Schema for the form; defaults to the order form
                schema built for ``toppings``
            toppings: Topping catalog offered by the form

        Raises:
            ValueError: If the schema does not allow every catalog topping
        """
        self.toppings: Tuple[str, ...] = tuple(toppings)
        if schema is None:
            schema = build_order_form_schema(self.toppings)
        self.engine = ValidationEngine(schema)
        self._check_catalog()
        self._values = FormValues()
        self._errors = FormErrors()
        self._message: Optional[str] = None
        self._gate = SubmitStateMachine()

    @property
    def values(self) -> FormValues:
        return self._values

    @property
    def errors(self) -> FormErrors:
        return FormErrors(self._errors)

    @property
    def state(self) -> SubmitState:
        return self._gate.state

    @property
    def submit_enabled(self) -> bool:
        return self._gate.is_enabled

    @property
    def is_disabled(self) -> bool:
        return not self._gate.is_enabled

    @property
    def message(self) -> Optional[str]:
        """Confirmation message of the last successful submit, if any."""
        return self._message

    def message_lines(self) -> List[str]:
        return message_lines(self._message or "")

    @property
    def transitions(self) -> List[Transition]:
        return self._gate.get_transitions()

    def on_field_change(self, field_name: str, raw_value: Any, is_multi_value: bool = False) -> None:
        """Apply a field change and re-derive errors and submit enablement.

        ``fullName`` is trimmed before it is stored. For multi-value fields
        ``field_name`` is the topping name and its membership is toggled.
        Fields governed by the schema are re-validated on their own.

        Args:
            field_name: Name of the changed input
            raw_value: Value of the input as entered
            is_multi_value: Whether the input is a topping checkbox

        Raises:
            ValueError: If the field or topping is unknown
        """
        if is_multi_value:
            self._check_topping(field_name)
            self._values = self._values.toggle_topping(field_name)
            logger.debug("Toggled topping %s", field_name)
        else:
            value = raw_value.strip() if field_name == FULL_NAME else raw_value
            self._values = self._values.with_field(field_name, value)
            logger.debug("Field %s changed", field_name)
            if self.engine.governs(field_name):
                self._validate_field(field_name, value)

        self.revalidate_all()

    def handle_event(self, event: ChangeEvent) -> None:
        """Apply a change event carrying ``{name, value, type, checked}``.

        Checkbox events select or clear the topping according to
        ``checked``; every other event is a plain field change.
        """
        name = event["name"]
        if event.get("type") == "checkbox":
            self._check_topping(name)
            self._values = self._values.with_topping(name, bool(event.get("checked")))
            logger.debug("Topping %s set to %s", name, bool(event.get("checked")))
            self.revalidate_all()
            return
        self.on_field_change(name, event.get("value", ""))

    def revalidate_all(self, trigger: Trigger = Trigger.FIELD_CHANGE) -> bool:
        """Recompute submit enablement from full-schema validity.

        Returns:
            Whether submit is enabled afterwards
        """
        self._gate.evaluate(self.engine.is_valid(self._values.to_dict()), trigger)
        return self._gate.is_enabled

    def on_submit(self) -> Optional[str]:
        """Validate the whole form and submit it if it passes.

        On success the confirmation message is returned and kept in
        ``message``, and values and errors are reset. On failure every
        invalid field gets its message, values are left as they are and
        None is returned. The submit gate ends DISABLED either way.
        """
        errors, is_valid = derive_state(self._values, self.engine.properties, self.engine)

        if not is_valid:
            self._errors = errors
            self._message = None
            self._gate.disable(Trigger.SUBMIT)
            logger.debug("Submit rejected: %s", {k: v for k, v in errors.items() if v})
            return None

        message = build_confirmation_message(self._values)
        logger.info(
            "Order submitted: size=%s toppings=%d",
            self._values.size,
            len(self._values.toppings),
        )
        self._clear()
        self._message = message
        self._gate.disable(Trigger.SUBMIT)
        return message

    def reset(self) -> None:
        """Restore the initial empty form and clear the message."""
        self._clear()
        self._message = None
        self.revalidate_all(Trigger.RESET)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of everything a display layer needs."""
        return {
            "values": self._values.to_dict(),
            "errors": dict(self._errors),
            "submitEnabled": self.submit_enabled,
            "message": self._message,
        }

    def _clear(self) -> None:
        self._values = FormValues()
        self._errors = FormErrors()

    def _check_catalog(self) -> None:
        if not self.engine.governs(TOPPINGS_FIELD):
            return
        rejected = [
            topping for topping in self.toppings
            if not self.engine.validate_field(TOPPINGS_FIELD, [topping]).is_valid
        ]
        if rejected:
            raise ValueError(f"Schema does not allow toppings: {', '.join(rejected)}")

    def _check_topping(self, topping: str) -> None:
        if topping not in self.toppings:
            raise ValueError(f"Unknown topping '{topping}'")

    def _validate_field(self, name: str, value: Any) -> None:
        try:
            self.engine.validate_field_or_raise(name, value)
        except FieldValidationError as err:
            self._errors[name] = err.message
        else:
            self._errors[name] = ""


__all__ = [
    "OrderFormValidator",
    "derive_state",
]
