"""Submit gate state machine for the order form.

The submit control has two states: DISABLED (initial, and whenever the
current values fail the schema) and ENABLED (whenever they pass). The gate
is re-evaluated after every field change, submit attempt and reset, and
every actual state change is recorded as a Transition.

Usage:
    >>> from orderform.state_machine import SubmitStateMachine
    >>> from orderform.types import SubmitState, Trigger
    >>> sm = SubmitStateMachine()
    >>> sm.state
    <SubmitState.DISABLED: 'disabled'>
    >>> sm.evaluate(True, Trigger.FIELD_CHANGE)
    <SubmitState.ENABLED: 'enabled'>
    >>> len(sm.get_transitions())
    1
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from dateutil.parser import isoparse

from orderform.types import SubmitState, Trigger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """A recorded change of the submit gate.

    Attributes:
        from_state: State before the change
        to_state: State after the change
        trigger: What caused the re-evaluation
        ts: UTC timestamp of the change
    """
    from_state: SubmitState
    to_state: SubmitState
    trigger: Trigger
    ts: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization. Timestamp is ISO 8601."""
        return {
            "fromState": self.from_state.value,
            "toState": self.to_state.value,
            "trigger": self.trigger.value,
            "ts": self.ts.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transition":
        """Create Transition from dict."""
        return cls(
            from_state=SubmitState(data["fromState"]),
            to_state=SubmitState(data["toState"]),
            trigger=Trigger(data["trigger"]),
            ts=isoparse(data["ts"]),
        )


@dataclass
class SubmitStateMachine:
    """State machine gating the submit control.

    Attributes:
        state: Current state of the gate

    Examples:
        >>> sm = SubmitStateMachine()
        >>> sm.is_enabled
        False
        >>> sm.evaluate(False, Trigger.SUBMIT)
        <SubmitState.DISABLED: 'disabled'>
        >>> sm.get_transitions()
        []
    """

    state: SubmitState = SubmitState.DISABLED
    _transitions: List[Transition] = field(default_factory=list, init=False, repr=False)

    @property
    def is_enabled(self) -> bool:
        return self.state == SubmitState.ENABLED

    def evaluate(self, is_valid: bool, trigger: Trigger) -> SubmitState:
        """Move to the state matching ``is_valid`` and return it.

        A transition is only recorded when the state actually changes.

        Args:
            is_valid: Whether the current values pass the full schema
            trigger: What caused this evaluation
        """
        target = SubmitState.ENABLED if is_valid else SubmitState.DISABLED
        if target != self.state:
            self._record(target, trigger)
        return self.state

    def disable(self, trigger: Trigger) -> SubmitState:
        """Force the gate to DISABLED."""
        return self.evaluate(False, trigger)

    def _record(self, target: SubmitState, trigger: Trigger) -> None:
        transition = Transition(
            from_state=self.state,
            to_state=target,
            trigger=trigger,
            ts=datetime.now(timezone.utc),
        )
        logger.debug(
            "Submit gate %s -> %s on %s",
            transition.from_state.value,
            transition.to_state.value,
            trigger.value,
        )
        self.state = target
        self._transitions.append(transition)

    def get_transitions(self) -> List[Transition]:
        """Get all recorded transitions in chronological order."""
        return list(self._transitions)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the state machine to a dictionary.

        Examples:
            >>> SubmitStateMachine().to_dict()
            {'state': 'disabled', 'transitions': []}
        """
        return {
            "state": self.state.value,
            "transitions": [t.to_dict() for t in self._transitions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubmitStateMachine":
        """Deserialize a state machine from a dictionary."""
        sm = cls(state=SubmitState(data["state"]))
        sm._transitions.extend(Transition.from_dict(t) for t in data.get("transitions", []))
        return sm


__all__ = [
    "SubmitStateMachine",
    "Transition",
]
