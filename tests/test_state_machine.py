"""Unit tests for the submit gate state machine.

Tests cover:
- Initial state
- Evaluation to ENABLED and DISABLED
- Transition recording (only on actual changes)
- Serialization and deserialization
"""

from datetime import datetime, timezone

import pytest

from orderform.state_machine import SubmitStateMachine, Transition
from orderform.types import SubmitState, Trigger


class TestStateMachineInitialization:
    """Test state machine initialization and defaults."""

    def test_initial_state_is_disabled(self):
        sm = SubmitStateMachine()
        assert sm.state == SubmitState.DISABLED
        assert sm.is_enabled is False
        assert sm.get_transitions() == []

    def test_init_with_custom_state(self):
        sm = SubmitStateMachine(state=SubmitState.ENABLED)
        assert sm.is_enabled is True


class TestEvaluate:
    """Test evaluation of the gate."""

    def test_valid_enables(self):
        sm = SubmitStateMachine()
        assert sm.evaluate(True, Trigger.FIELD_CHANGE) == SubmitState.ENABLED
        assert sm.is_enabled is True

    def test_invalid_disables(self):
        sm = SubmitStateMachine(state=SubmitState.ENABLED)
        assert sm.evaluate(False, Trigger.FIELD_CHANGE) == SubmitState.DISABLED

    def test_disable(self):
        sm = SubmitStateMachine(state=SubmitState.ENABLED)
        assert sm.disable(Trigger.SUBMIT) == SubmitState.DISABLED

    @pytest.mark.parametrize("is_valid", [True, False])
    def test_repeated_evaluation_is_idempotent(self, is_valid):
        sm = SubmitStateMachine()
        first = sm.evaluate(is_valid, Trigger.FIELD_CHANGE)
        second = sm.evaluate(is_valid, Trigger.FIELD_CHANGE)
        assert first == second


class TestTransitions:
    """Test transition recording."""

    def test_transition_recorded_on_change(self):
        sm = SubmitStateMachine()
        sm.evaluate(True, Trigger.FIELD_CHANGE)

        transitions = sm.get_transitions()
        assert len(transitions) == 1
        assert transitions[0].from_state == SubmitState.DISABLED
        assert transitions[0].to_state == SubmitState.ENABLED
        assert transitions[0].trigger == Trigger.FIELD_CHANGE
        assert transitions[0].ts.tzinfo is not None

    def test_no_transition_without_change(self):
        sm = SubmitStateMachine()
        sm.evaluate(False, Trigger.FIELD_CHANGE)
        sm.disable(Trigger.SUBMIT)

        assert sm.get_transitions() == []

    def test_transitions_in_order(self):
        sm = SubmitStateMachine()
        sm.evaluate(True, Trigger.FIELD_CHANGE)
        sm.disable(Trigger.SUBMIT)

        assert [(t.to_state, t.trigger) for t in sm.get_transitions()] == [
            (SubmitState.ENABLED, Trigger.FIELD_CHANGE),
            (SubmitState.DISABLED, Trigger.SUBMIT),
        ]

    def test_get_transitions_returns_copy(self):
        sm = SubmitStateMachine()
        sm.evaluate(True, Trigger.FIELD_CHANGE)
        sm.get_transitions().clear()

        assert len(sm.get_transitions()) == 1


class TestSerialization:
    """Test state machine and transition serialization."""

    def test_transition_to_dict(self):
        ts = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        transition = Transition(
            from_state=SubmitState.DISABLED,
            to_state=SubmitState.ENABLED,
            trigger=Trigger.FIELD_CHANGE,
            ts=ts,
        )

        assert transition.to_dict() == {
            "fromState": "disabled",
            "toState": "enabled",
            "trigger": "field_change",
            "ts": "2024-01-15T10:30:00+00:00",
        }

    def test_transition_from_dict_accepts_z_suffix(self):
        transition = Transition.from_dict({
            "fromState": "enabled",
            "toState": "disabled",
            "trigger": "submit",
            "ts": "2024-01-15T10:30:00Z",
        })

        assert transition.to_state == SubmitState.DISABLED
        assert transition.trigger == Trigger.SUBMIT
        assert transition.ts == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_roundtrip(self):
        sm = SubmitStateMachine()
        sm.evaluate(True, Trigger.FIELD_CHANGE)

        restored = SubmitStateMachine.from_dict(sm.to_dict())

        assert restored.state == SubmitState.ENABLED
        assert restored.get_transitions() == sm.get_transitions()

    def test_from_dict_without_transitions(self):
        sm = SubmitStateMachine.from_dict({"state": "disabled"})

        assert sm.state == SubmitState.DISABLED
        assert sm.get_transitions() == []
