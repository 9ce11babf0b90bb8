"""Confirmation message shown after a successful order."""

from typing import List

from orderform.types import FormValues, Size


def size_label(code: str) -> str:
    """Word used for a size code in the confirmation message.

    Codes outside the size selector fall through to "large".
    """
    try:
        return Size(code).label
    except ValueError:
        return Size.LARGE.label


def toppings_phrase(count: int) -> str:
    """
    >>> toppings_phrase(0)
    'with no toppings'
    >>> toppings_phrase(1)
    'with 1 topping'
    >>> toppings_phrase(3)
    'with 3 toppings'
    """
    if count == 0:
        return "with no toppings"
    return f"with {count} topping{'s' if count > 1 else ''}"


def build_confirmation_message(values: FormValues) -> str:
    """Build the two-line confirmation message for validated values.

    Examples:
        >>> values = FormValues(full_name="Bob", size="L")
        >>> print(build_confirmation_message(values))
        Thank you for your order, Bob!
        Your large pizza with no toppings is on the way!
    """
    return (
        f"Thank you for your order, {values.full_name}!\n"
        f"Your {size_label(values.size)} pizza {toppings_phrase(len(values.toppings))} is on the way!"
    )


def message_lines(message: str) -> List[str]:
    """Split a confirmation message into display lines."""
    return message.split("\n") if message else []


__all__ = [
    "build_confirmation_message",
    "message_lines",
    "size_label",
    "toppings_phrase",
]
