"""Core type definitions for the order form.

This module defines the fundamental types used throughout the package:
- Size: Pizza size codes offered by the size selector
- FieldErrorCode: Validation error codes for individual fields
- SubmitState: States of the submit gate
- Trigger: What caused the submit gate to be re-evaluated
- TOPPINGS: The fixed topping catalog
- FormValues: The current user-entered state of the form
- ChangeEvent: Browser-style field change payload
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple

from typing_extensions import TypedDict


class Size(str, Enum):
    """Pizza size codes, as submitted by the size selector."""
    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"

    @property
    def label(self) -> str:
        """Lower-case word used in confirmation messages."""
        return self.name.lower()


class FieldErrorCode(str, Enum):
    """Validation error codes for individual field failures."""
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"


class SubmitState(str, Enum):
    """States of the submit control.

    DISABLED is the initial state and the state after every successful
    submission, since the reset values never pass validation.
    """
    DISABLED = "disabled"
    ENABLED = "enabled"


class Trigger(str, Enum):
    """Reason the submit gate was re-evaluated."""
    FIELD_CHANGE = "field_change"
    SUBMIT = "submit"
    RESET = "reset"


# Fixed topping catalog, in display order
TOPPINGS: Tuple[str, ...] = (
    "Pepperoni",
    "Green Peppers",
    "Pineapple",
    "Mushrooms",
    "Ham",
)

FULL_NAME = "fullName"
SIZE = "size"
TOPPINGS_FIELD = "toppings"


class ChangeEvent(TypedDict, total=False):
    """Change event as emitted by a form input.

    Mirrors the ``{name, value, type, checked}`` attributes of a DOM input
    element. ``checked`` is only meaningful for checkboxes.
    """
    name: str
    value: str
    type: str
    checked: bool


@dataclass(frozen=True)
class FormValues:
    """Current user-entered state of the order form.

    Instances are immutable; the ``with_*`` helpers return updated copies.

    Attributes:
        full_name: Customer name (stored trimmed)
        size: Size code, or "" when nothing is selected
        toppings: Selected toppings, a subset of the catalog

    Examples:
        >>> values = FormValues().with_field("fullName", "Alice")
        >>> values.full_name
        'Alice'
        >>> values.toggle_topping("Ham").toppings
        frozenset({'Ham'})
    """
    full_name: str = ""
    size: str = ""
    toppings: FrozenSet[str] = field(default_factory=frozenset)

    def with_field(self, name: str, value: str) -> "FormValues":
        """Return a copy with a single-valued field replaced."""
        if name == FULL_NAME:
            return replace(self, full_name=value)
        if name == SIZE:
            return replace(self, size=value)
        raise ValueError(f"Unknown form field '{name}'")

    def toggle_topping(self, topping: str) -> "FormValues":
        """Return a copy with ``topping`` added if absent, removed if present."""
        if topping in self.toppings:
            return replace(self, toppings=self.toppings - {topping})
        return replace(self, toppings=self.toppings | {topping})

    def with_topping(self, topping: str, selected: bool) -> "FormValues":
        """Return a copy with ``topping`` explicitly selected or cleared."""
        if selected:
            return replace(self, toppings=self.toppings | {topping})
        return replace(self, toppings=self.toppings - {topping})

    def ordered_toppings(self, catalog: Iterable[str] = TOPPINGS) -> List[str]:
        """Selected toppings in catalog order, unknown names last."""
        catalog = list(catalog)
        known = [t for t in catalog if t in self.toppings]
        extra = sorted(t for t in self.toppings if t not in catalog)
        return known + extra

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dict validated by the schema."""
        return {
            FULL_NAME: self.full_name,
            SIZE: self.size,
            TOPPINGS_FIELD: self.ordered_toppings(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormValues":
        """Create FormValues from a camelCase dict."""
        return cls(
            full_name=data.get(FULL_NAME, ""),
            size=data.get(SIZE, ""),
            toppings=frozenset(data.get(TOPPINGS_FIELD, ())),
        )


__all__ = [
    "Size",
    "FieldErrorCode",
    "SubmitState",
    "Trigger",
    "TOPPINGS",
    "FULL_NAME",
    "SIZE",
    "TOPPINGS_FIELD",
    "ChangeEvent",
    "FormValues",
]
