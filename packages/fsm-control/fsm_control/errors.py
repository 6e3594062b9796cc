"""Exception types raised by fsm-control."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fsm_control.types import EventData


class StateMachineError(Exception):
    """Base class for all fsm-control errors."""


class UnknownStateError(StateMachineError, ValueError):
    """Raised when a state name is not part of the transition table."""

    def __init__(self, state: str, message: str) -> None:
        self.state = state
        super().__init__(message)


class TransitionError(StateMachineError):
    """Raised by ``StateMachine.step`` when the table, a transition handler
    or a hook fails. The original exception is the ``__cause__``.

    ``event`` is the descriptor of the transition if the table had already
    produced one when the failure happened, else ``None``.
    """

    def __init__(self, action: str, message: str, event: EventData | None = None) -> None:
        self.action = action
        self.event = event
        super().__init__(message)
