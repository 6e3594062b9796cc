"""StateMachine - transition controller with pending lock and state hooks."""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Iterable, Mapping

from fsm_control.errors import TransitionError
from fsm_control.handlers import resolve_handler
from fsm_control.hooks import HookRegistry
from fsm_control.table import TransitionTable
from fsm_control.types import (
    EventData,
    Hook,
    MachineOptions,
    StepResult,
    TransitionHandler,
    TransitionSource,
    TransitionSpec,
)

logger = logging.getLogger(__name__)


class StateMachine:
    """Runs actions against a transition table one at a time.

    ``step`` validates an action through the table, runs the
    ``on_transition`` handler, then fires the hooks registered for the
    destination state. While a step is in flight every other ``step``
    call returns ``False`` without touching the table.

    ``on_transition`` is either a callable taking the ``EventData`` or a
    mapping from destination state (and ``"*"`` for every transition) to
    such callables. Handlers may be coroutine functions.
    """

    def __init__(
        self,
        transitions: Iterable[TransitionSpec] = (),
        init_state: str | None = None,
        on_transition: TransitionHandler | Mapping[str, TransitionHandler] | None = None,
        *,
        table: TransitionSource | None = None,
    ) -> None:
        if table is None:
            if init_state is None:
                raise TypeError("init_state is required when no table is given")
            table = TransitionTable(transitions, init_state)
        self._table = table
        self._handler = resolve_handler(on_transition)
        self._hooks = HookRegistry()
        self._lock = asyncio.Lock()

    @classmethod
    def from_options(cls, options: MachineOptions | Mapping[str, Any]) -> StateMachine:
        """Build from ``MachineOptions`` or a mapping of the same fields.

        Mapping keys may use either ``init_state``/``on_transition`` or
        ``initState``/``onTransition``.
        """
        if isinstance(options, Mapping):
            options = MachineOptions(
                transitions=options["transitions"],
                init_state=options.get("init_state", options.get("initState")),
                on_transition=options.get("on_transition", options.get("onTransition")),
                states=options.get("states", ()),
            )
        table = TransitionTable(options.transitions, options.init_state, options.states)
        return cls(on_transition=options.on_transition, table=table)

    @property
    def table(self) -> TransitionSource:
        return self._table

    @property
    def is_pending(self) -> bool:
        return self._lock.locked()

    # -- Hooks --

    def on(self, state: str, fn: Hook) -> bool:
        """Call ``fn(*args)`` on every entry into ``state``.

        Returns ``False`` without registering if ``state`` is unknown.
        """
        if state not in self._table.get_states():
            return False
        self._hooks.add(state, fn)
        return True

    def once(self, state: str, fn: Hook) -> bool:
        """Call ``fn(*args)`` on the next entry into ``state`` only."""
        if state not in self._table.get_states():
            return False
        self._hooks.add_once(state, fn)
        return True

    def off(self, state: str, fn: Hook) -> None:
        self._hooks.remove(state, fn)

    def remove_all_listeners(self, state: str | None = None) -> None:
        self._hooks.clear(state)

    def listeners(self, state: str) -> tuple[list[Hook], list[Hook]]:
        """Return copies of the persistent and one-shot hooks for ``state``."""
        return self._hooks.listeners(state)

    # -- Queries --

    def get_methods(self, state: str | None = None) -> list[str]:
        return self._table.get_methods(state)

    def get_state_list(self) -> list[str]:
        return self._table.get_states()

    def get_state(self) -> str:
        return self._table.state

    def can(self, action: str) -> bool:
        return action in self._table.get_methods()

    # -- Transitions --

    async def step(self, action: str, *args: Any) -> StepResult:
        """Trigger ``action``; return its ``EventData`` or ``False``.

        ``False`` means the action is not legal from the current state,
        the table declined it, or another step is still pending. Failures
        in the table, the handler or a hook are raised as
        ``TransitionError``; the pending lock is released either way.
        """
        if self._lock.locked():
            logger.debug("Rejected %r: a transition is pending", action)
            return False

        async with self._lock:
            event: EventData | None = None
            try:
                result = self._table.step_to(action, *args)
                if inspect.isawaitable(result):
                    result = await result
                if not result:
                    return False
                event = result
                await self._handler.dispatch(event)
                self._hooks.dispatch(event.on, args)
            except Exception as exc:
                raise TransitionError(
                    action, f"Transition {action!r} failed: {exc}", event
                ) from exc

        logger.debug("Transition %r: %r -> %r", action, event.before, event.on)
        return event
