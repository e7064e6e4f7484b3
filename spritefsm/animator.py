"""Maps a state machine's current state onto a sequence of sprite frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Iterable, Mapping, TypeVar

from spritefsm.state_machine import CurrentState, StateMachine

K = TypeVar("K", bound=Hashable)
P = TypeVar("P")
F = TypeVar("F")


@dataclass
class Frame(Generic[F]):
    """An animation frame shown from ``progress`` (in [0.0, 1.0]) onwards."""

    progress: float
    value: F


class AnimatorError(Exception):
    """Raised when an animator's frames do not fit its state machine."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def _fields(self) -> tuple:
        return (self.key,)

    def __repr__(self) -> str:
        args = ", ".join(repr(item) for item in self._fields())
        return f"{type(self).__name__}({args})"

    def __str__(self) -> str:
        return repr(self)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._fields()))


class EmptyStateFrames(AnimatorError):
    """A state has an empty list of frames."""


class MissingStateFrames(AnimatorError):
    """A state has no frames at all."""


class UnsortedStateFrames(AnimatorError):
    """A state's frames are not sorted by progress."""


class InvalidStateFrameProgress(AnimatorError):
    """A frame's progress lies outside [0.0, 1.0]."""

    def __init__(self, key: Any, progress: float) -> None:
        super().__init__(key)
        self.args = (key, progress)
        self.progress = progress

    def _fields(self) -> tuple:
        return (self.key, self.progress)


def _validate_frames(key: Any, frames: list[Frame[Any]]) -> None:
    if not frames:
        raise EmptyStateFrames(key)
    last_progress = -1.0
    for frame in frames:
        if frame.progress < last_progress:
            raise UnsortedStateFrames(key)
        if not 0.0 <= frame.progress <= 1.0:
            raise InvalidStateFrameProgress(key, frame.progress)
        last_progress = frame.progress


class Animator(Generic[K, P, F]):
    """Translates a state machine's progress into the frame to display."""

    def __init__(
        self,
        state_machine: StateMachine[K, P],
        state_frames: Mapping[K, Iterable[Frame[F]]],
    ) -> None:
        frames_by_state = {key: list(frames) for key, frames in state_frames.items()}
        for key in state_machine._states:
            if key not in frames_by_state:
                raise MissingStateFrames(key)
            _validate_frames(key, frames_by_state[key])
        self._state_machine = state_machine
        self._state_frames = frames_by_state

    def __repr__(self) -> str:
        return (
            f"Animator(state_machine={self._state_machine!r}, "
            f"state_frames={self._state_frames!r})"
        )

    def update(self, delta_time: float) -> None:
        """Advance the elapsed time."""
        self._state_machine.update(delta_time)

    def update_parameters(self, update: Callable[[P], P | None]) -> None:
        """Update the parameters and follow any conditional transitions."""
        self._state_machine.update_parameters(update)

    def state(self) -> CurrentState[K]:
        """The current state."""
        return self._state_machine.state()

    def parameters(self) -> P:
        """The state machine's parameters."""
        return self._state_machine.parameters()

    def frame(self) -> F:
        """The value of the frame to display for the current progress."""
        current = self._state_machine.state()
        frames = self._state_frames[current.key]
        progress = current.progress()
        chosen = frames[0]
        for candidate in frames:
            if candidate.progress > progress:
                return chosen.value
            chosen = candidate
        return chosen.value