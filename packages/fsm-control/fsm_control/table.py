"""TransitionTable - the default transition source."""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Iterable, Mapping

from fsm_control.errors import UnknownStateError
from fsm_control.types import WILDCARD, EventData, StepResult, Transition, TransitionSpec

logger = logging.getLogger(__name__)


def _coerce(spec: TransitionSpec) -> Transition:
    if isinstance(spec, Transition):
        return spec
    if isinstance(spec, Mapping):
        return Transition.from_dict(spec)
    raise TypeError(f"Expected Transition or mapping, got {type(spec).__name__}")


def _pack_args(args: tuple[Any, ...]) -> Any:
    if not args:
        return None
    if len(args) == 1:
        return args[0]
    return args


class TransitionTable:
    """Directed graph of named transitions plus the current-state pointer.

    Owns the authority over which action is legal from which state.
    ``step_to`` moves the pointer as soon as the destination is known.
    """

    def __init__(
        self,
        transitions: Iterable[TransitionSpec],
        init_state: str,
        states: Iterable[str] = (),
    ) -> None:
        self._transitions: list[Transition] = [_coerce(t) for t in transitions]
        self._states: list[str] = []
        seen: set[str] = set()

        def add(name: str) -> None:
            if name != WILDCARD and name not in seen:
                seen.add(name)
                self._states.append(name)

        for t in self._transitions:
            for name in t.sources():
                add(name)
            if isinstance(t.target, str):
                add(t.target)
        for name in states:
            add(name)

        if init_state not in seen:
            raise UnknownStateError(init_state, f"Unknown initial state {init_state!r}")
        self._state = init_state

    @property
    def state(self) -> str:
        return self._state

    def get_states(self) -> list[str]:
        return list(self._states)

    def get_methods(self, state: str | None = None) -> list[str]:
        if state is None:
            state = self._state
        names: list[str] = []
        for t in self._transitions:
            if t.matches(state) and t.name not in names:
                names.append(t.name)
        return names

    def _find(self, action: str) -> Transition | None:
        for t in self._transitions:
            if t.name == action and t.matches(self._state):
                return t
        return None

    def step_to(self, action: str, *args: Any) -> StepResult | Awaitable[StepResult]:
        """Validate ``action`` from the current state and move to its target.

        Returns ``False`` when the action is not legal here, a target
        resolver declines, or the target is the current state. A resolver
        that returns an awaitable makes this return a coroutine with the
        same outcome.
        """
        transition = self._find(action)
        if transition is None:
            logger.debug("Action %r not available from state %r", action, self._state)
            return False

        before = self._state
        arg = _pack_args(args)
        if isinstance(transition.target, str):
            return self._commit(before, transition.target, action, arg)

        target = transition.target(*args)
        if inspect.isawaitable(target):
            return self._commit_later(before, target, action, arg)
        return self._commit(before, target, action, arg)

    async def _commit_later(
        self, before: str, pending: Awaitable[Any], action: str, arg: Any,
    ) -> StepResult:
        target = await pending
        return self._commit(before, target, action, arg)

    def _commit(self, before: str, target: Any, action: str, arg: Any) -> StepResult:
        if target is None or target is False:
            logger.debug("Action %r declined from state %r", action, before)
            return False
        if target not in self._states:
            raise UnknownStateError(
                target, f"Action {action!r} resolved to unknown state {target!r}"
            )
        if target == before:
            logger.debug("Action %r leaves state %r unchanged", action, before)
            return False
        self._state = target
        return EventData(before=before, on=target, action=action, arg=arg)
