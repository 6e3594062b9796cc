"""fsm-control - Finite state machine controller with async transitions and state hooks."""
from __future__ import annotations

from fsm_control.errors import StateMachineError, TransitionError, UnknownStateError
from fsm_control.handlers import KeyedHandlers, SingleHandler
from fsm_control.hooks import HookRegistry
from fsm_control.machine import StateMachine
from fsm_control.table import TransitionTable
from fsm_control.types import EventData, MachineOptions, Transition, TransitionSource

__all__ = [
    "StateMachine",
    "TransitionTable",
    "Transition",
    "TransitionSource",
    "EventData",
    "MachineOptions",
    "HookRegistry",
    "SingleHandler",
    "KeyedHandlers",
    "StateMachineError",
    "TransitionError",
    "UnknownStateError",
]
