"""Test suite for the orderform package.

This package contains tests for:
- Validation engine (required and length rules, toppings, single-field checks)
- Submit gate state machine (evaluation, transitions, serialization)
- Form values, error types and the confirmation message
- Integration scenarios (field changes, submit success and failure, reset)
"""
