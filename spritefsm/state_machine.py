"""A time- and parameter-driven state machine for sprite animation states."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Hashable, Iterable, Mapping, TypeVar, Union

K = TypeVar("K", bound=Hashable)
P = TypeVar("P")


@dataclass
class State:
    """Static description of a state: how long it lasts and whether it loops."""

    duration: float
    repeat: bool


@dataclass
class CurrentState(Generic[K]):
    """The state a machine is in right now, with its elapsed time."""

    key: K
    duration: float
    elapsed: float
    repeat: bool

    def progress(self) -> float:
        """Fraction of the state's duration that has elapsed."""
        if self.duration == 0:
            if self.elapsed == 0 or math.isnan(self.elapsed):
                return math.nan
            return math.copysign(math.inf, self.elapsed)
        return self.elapsed / self.duration

    def finished(self) -> bool:
        """Whether the elapsed time has reached the state's duration."""
        return self.elapsed >= self.duration


@dataclass(frozen=True)
class AnyState:
    """Transition start that matches whichever state is current."""


@dataclass(frozen=True)
class Node(Generic[K]):
    """A specific state, used as a transition's start or end."""

    key: K


@dataclass(frozen=True)
class Condition(Generic[P]):
    """Trigger that fires when the predicate holds for the parameters."""

    predicate: Callable[[P], bool] = field(repr=False, compare=False)

    def fires(self, parameters: P, ended: bool) -> bool:
        return bool(self.predicate(parameters))


@dataclass(frozen=True)
class End:
    """Trigger that fires when the current state has run its full duration."""

    def fires(self, parameters: Any, ended: bool) -> bool:
        return ended


Trigger = Union[Condition, End]


@dataclass
class Transition(Generic[K, P]):
    """An edge from a start state (or any state) to an end state."""

    start_state: AnyState | Node[K]
    end_state: Node[K]
    trigger: Trigger


class StateMachineError(Exception):
    """Raised when a state machine is built from inconsistent definitions."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"

    def __str__(self) -> str:
        return repr(self)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.key == other.key  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.key))


class InvalidStartingState(StateMachineError):
    """The starting state is not among the defined states."""


class InvalidTransitionStartState(StateMachineError):
    """A transition starts from a state that is not defined."""


class InvalidTransitionEndState(StateMachineError):
    """A transition ends in a state that is not defined."""


class StateMachine(Generic[K, P]):
    """Tracks an entity's animation state over time and parameter changes."""

    def __init__(
        self,
        starting_state: K,
        states: Mapping[K, State],
        transitions: Iterable[Transition[K, P]],
        parameters: P,
    ) -> None:
        states = dict(states)
        transitions = list(transitions)
        if starting_state not in states:
            raise InvalidStartingState(starting_state)
        for transition in transitions:
            start = transition.start_state
            if isinstance(start, Node) and start.key not in states:
                raise InvalidTransitionStartState(start.key)
            if transition.end_state.key not in states:
                raise InvalidTransitionEndState(transition.end_state.key)

        start_state = states[starting_state]
        self._current = CurrentState(
            key=starting_state,
            duration=start_state.duration,
            elapsed=0.0,
            repeat=start_state.repeat,
        )
        self._states = states
        self._transitions = transitions
        self._parameters = parameters

    def __repr__(self) -> str:
        return (
            f"StateMachine(current_state={self._current!r}, states={self._states!r}, "
            f"transitions={self._transitions!r}, parameters={self._parameters!r})"
        )

    def state(self) -> CurrentState[K]:
        """The current state."""
        return self._current

    def parameters(self) -> P:
        """The parameters that conditional transitions are evaluated against."""
        return self._parameters

    def _leaves_current(self, transition: Transition[K, P]) -> bool:
        start = transition.start_state
        key = self._current.key
        starts_here = isinstance(start, AnyState) or start.key == key
        return starts_here and transition.end_state.key != key

    def _find(self, fires: Callable[[Trigger], bool]) -> Transition[K, P] | None:
        return next(
            (t for t in self._transitions if self._leaves_current(t) and fires(t.trigger)),
            None,
        )

    def _enter(self, key: K) -> None:
        target = self._states[key]
        self._current.key = key
        self._current.duration = target.duration
        self._current.elapsed = 0.0
        self._current.repeat = target.repeat

    def _follow_transitions(self) -> None:
        visited: set[K] = set()
        while True:
            ended = self._current.finished()
            transition = self._find(lambda trig: trig.fires(self._parameters, ended))
            if transition is None:
                return
            key = transition.end_state.key
            if key in visited:
                return
            self._enter(key)
            visited.add(key)

    def update_parameters(self, update: Callable[[P], P | None]) -> None:
        """Apply ``update`` to the parameters and follow any conditional transitions.

        ``update`` may mutate the parameters in place or return a replacement value.
        """
        result = update(self._parameters)
        if result is not None:
            self._parameters = result

        transition = self._find(
            lambda trig: isinstance(trig, Condition) and trig.fires(self._parameters, False)
        )
        if transition is not None:
            self._enter(transition.end_state.key)
            self._follow_transitions()

    def update(self, delta_time: float) -> None:
        """Advance the elapsed time and follow end-of-state transitions."""
        current = self._current
        if current.elapsed >= current.duration:
            return
        current.elapsed += delta_time
        if current.elapsed < current.duration:
            return

        if current.repeat:
            current.elapsed = math.fmod(current.elapsed, current.duration)
        else:
            current.elapsed = current.duration

        transition = self._find(lambda trig: isinstance(trig, End))
        if transition is not None:
            self._enter(transition.end_state.key)
            self._follow_transitions()