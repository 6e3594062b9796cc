"""Shared data types and protocols for fsm-control."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Mapping, Protocol, Sequence, Union

WILDCARD = "*"

# Transition handler: receives the descriptor, may return an awaitable.
TransitionHandler = Callable[["EventData"], Any]

# Hook callback: receives the positional arguments passed to ``step``.
Hook = Callable[..., Any]

# A callable target resolves the destination state from the step arguments.
TargetResolver = Callable[..., Union[str, None, Literal[False], Awaitable[Union[str, None, Literal[False]]]]]


@dataclass(frozen=True, slots=True)
class EventData:
    """Descriptor of an accepted transition."""

    before: str
    on: str
    action: str
    arg: Any = None


StepResult = Union[EventData, Literal[False]]


@dataclass(frozen=True)
class Transition:
    """One edge of the transition table.

    ``source`` is a state name, a sequence of names, or ``"*"`` for any
    state. ``target`` is a state name or a resolver called with the step
    arguments; a resolver returning ``None`` or ``False`` declines the
    transition.
    """

    name: str
    source: str | Sequence[str]
    target: str | TargetResolver

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Transition:
        """Build from a ``{"name", "from", "to"}`` mapping."""
        return cls(name=data["name"], source=data["from"], target=data["to"])

    def sources(self) -> tuple[str, ...]:
        if isinstance(self.source, str):
            return (self.source,)
        return tuple(self.source)

    def matches(self, state: str) -> bool:
        sources = self.sources()
        return WILDCARD in sources or state in sources


TransitionSpec = Union[Transition, Mapping[str, Any]]


class TransitionSource(Protocol):
    """What ``StateMachine`` needs from a transition table."""

    @property
    def state(self) -> str: ...

    def get_states(self) -> list[str]: ...

    def get_methods(self, state: str | None = None) -> list[str]: ...

    def step_to(self, action: str, *args: Any) -> StepResult | Awaitable[StepResult]: ...


@dataclass
class MachineOptions:
    """Construction options for ``StateMachine.from_options``."""

    transitions: Sequence[TransitionSpec]
    init_state: str
    on_transition: TransitionHandler | Mapping[str, TransitionHandler] | None = None
    states: Sequence[str] = field(default_factory=tuple)
