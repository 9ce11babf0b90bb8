"""Order form validation state machine.

orderform provides the rules behind a pizza order form:
- Declarative JSON Schema with per-rule user-facing messages
- Per-field validation on change, whole-form validation on submit
- A submit gate that is enabled exactly when the form is valid
- A confirmation message built from the submitted order

Basic usage:
    >>> from orderform import OrderFormValidator
    >>> form = OrderFormValidator()
    >>> form.on_field_change("fullName", "Bob")
    >>> form.on_field_change("size", "L")
    >>> form.on_submit()
    'Thank you for your order, Bob!\\nYour large pizza with no toppings is on the way!'
"""

__version__ = "0.1.0"

from orderform.errors import FormErrors, RequiredError, TooShortError
from orderform.form import OrderFormValidator, derive_state
from orderform.types import TOPPINGS, FormValues, SubmitState

__all__ = [
    "__version__",
    "OrderFormValidator",
    "derive_state",
    "FormValues",
    "FormErrors",
    "RequiredError",
    "TooShortError",
    "SubmitState",
    "TOPPINGS",
]
