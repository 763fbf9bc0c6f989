"""A small state machine mapping each state to a transition function."""

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Generic, TypeVar

from doutil.unique import unique

S = TypeVar("S", bound=Hashable)

StateFunc = Callable[[S], S]


class StateMachine(Generic[S]):
    """Runs the transition function registered for a known state."""

    def __init__(self, states: Iterable[S]) -> None:
        self._states: list[S] = unique(states)
        self._funcs: dict[S, StateFunc] = {}

    @classmethod
    def from_mapping(cls, mapping: Mapping[S, StateFunc]) -> "StateMachine[S]":
        """Build a machine whose states are the keys of mapping."""
        machine = cls(mapping.keys())
        machine._funcs = dict(mapping)
        return machine

    @property
    def states(self) -> list[S]:
        return list(self._states)

    def with_func(self, state: S, func: StateFunc) -> None:
        """Register func for state; unknown states are ignored."""
        if state not in self._states:
            return
        self._funcs[state] = func

    def run(self, state: S) -> S:
        """Return the next state; unknown states are returned unchanged."""
        if state not in self._states:
            return state
        try:
            func = self._funcs[state]
        except KeyError:
            raise LookupError(f"no transition registered for state {state!r}") from None
        return func(state)