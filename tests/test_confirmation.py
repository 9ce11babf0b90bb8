"""Unit tests for the confirmation message."""

import pytest

from orderform.confirmation import (
    build_confirmation_message,
    message_lines,
    size_label,
    toppings_phrase,
)
from orderform.types import FormValues


class TestSizeLabel:
    """Test size code to word mapping."""

    @pytest.mark.parametrize("code,label", [("S", "small"), ("M", "medium"), ("L", "large")])
    def test_known_codes(self, code, label):
        assert size_label(code) == label

    def test_unknown_code_reads_as_large(self):
        assert size_label("XL") == "large"


class TestToppingsPhrase:
    """Test topping count pluralization."""

    def test_none(self):
        assert toppings_phrase(0) == "with no toppings"

    def test_singular(self):
        assert toppings_phrase(1) == "with 1 topping"

    def test_plural(self):
        assert toppings_phrase(5) == "with 5 toppings"


class TestBuildConfirmationMessage:
    """Test the full message."""

    def test_medium_with_two_toppings(self):
        values = FormValues(full_name="Alice", size="M", toppings=frozenset({"Pepperoni", "Ham"}))

        assert build_confirmation_message(values) == (
            "Thank you for your order, Alice!\n"
            "Your medium pizza with 2 toppings is on the way!"
        )

    def test_large_with_no_toppings(self):
        values = FormValues(full_name="Bob", size="L")

        assert build_confirmation_message(values).endswith(
            "large pizza with no toppings is on the way!"
        )

    def test_small_with_one_topping(self):
        values = FormValues(full_name="Carol", size="S", toppings=frozenset({"Pineapple"}))

        assert "Your small pizza with 1 topping is on the way!" in build_confirmation_message(values)


class TestMessageLines:
    """Test splitting a message for display."""

    def test_two_lines(self):
        assert message_lines("a\nb") == ["a", "b"]

    def test_empty_message_has_no_lines(self):
        assert message_lines("") == []
