# spritefsm

A small state machine for driving sprite animations.

`spritefsm.state_machine.StateMachine` tracks the animation state an entity is in and how far through that state it is. It also decides when to move to another state. A move happens when a condition on your parameters becomes true, or when a state's time runs out.

`spritefsm.animator.Animator` wraps a state machine. It maps the current state's progress to a frame value, which can be an image handle, a sprite index or anything else.

## Installation

```
pip install spritefsm
```

## Usage

```python
from dataclasses import dataclass

from spritefsm.state_machine import (
    AnyState, Condition, End, Node, State, StateMachine, Transition,
)
from spritefsm.animator import Animator, Frame


@dataclass
class Params:
    speed: float = 0.0
    jump: bool = False


machine = StateMachine(
    "idle",
    {
        "idle": State(duration=0.5, repeat=True),
        "walk": State(duration=1.0, repeat=True),
        "jump": State(duration=0.25, repeat=False),
    },
    [
        Transition(Node("idle"), Node("walk"), Condition(lambda p: p.speed > 0 and not p.jump)),
        Transition(Node("walk"), Node("idle"), Condition(lambda p: p.speed <= 0 and not p.jump)),
        Transition(AnyState(), Node("jump"), Condition(lambda p: p.jump)),
        Transition(Node("jump"), Node("walk"), End()),
    ],
    Params(),
)

frames = [Frame(progress=0.0, value=0), Frame(progress=0.33, value=1), Frame(progress=0.67, value=2)]
animator = Animator(machine, {"idle": frames, "walk": frames, "jump": frames})

animator.update(0.25)        # advance time by a quarter of a second
print(animator.frame())      # -> 1

def start_walking(params):
    params.speed = 1.0

animator.update_parameters(start_walking)
print(animator.state().key)  # -> "walk"
```

You can use a `StateMachine` on its own. `state()` returns the `CurrentState`, which has the following members:

- `key`, `duration`, `elapsed` and `repeat`.
- `progress()`, which returns `elapsed / duration`.
- `finished()`, which tells you whether `elapsed` has reached `duration`.

`parameters()` returns the current parameters.

The function passed to `update_parameters` can change the parameters in place. It can instead return a new parameters object, which then replaces the old one.

### How transitions are chosen

- Transitions are tried in the order given, and the first one that matches is taken.
- A transition never moves to the state the machine is already in.
- `AnyState()` as a start matches whichever state is current.
- `update_parameters` looks only at `Condition` transitions.
- `update` adds `delta_time` to the elapsed time. When the state's time runs out, it looks only at `End` transitions.
- After either call makes a transition, the machine keeps following transitions of both kinds. It stops when none applies or when a state would be entered a second time.
- When a repeating state's time runs out, its elapsed time wraps around. A state that does not repeat stops at its duration, and later calls to `update` leave it there.

### Frames

The frames for each state must be sorted by `progress`, and each `progress` must lie in `[0.0, 1.0]`. `frame()` returns the value of the last frame whose `progress` is not greater than the current progress. If no frame qualifies, it returns the first frame.

### Errors

Building a `StateMachine` raises a subclass of `StateMachineError` when a state is used but not defined:

- `InvalidStartingState` for the starting state.
- `InvalidTransitionStartState` for a transition's start.
- `InvalidTransitionEndState` for a transition's end.

Building an `Animator` raises a subclass of `AnimatorError` when every state of the machine does not have a valid list of frames:

- `MissingStateFrames` when a state has no entry.
- `EmptyStateFrames` when a state's list is empty.
- `UnsortedStateFrames` when a state's frames are out of order.
- `InvalidStateFrameProgress` when a frame's `progress` is outside `[0.0, 1.0]`.

Each error has a `key` attribute naming the state. `InvalidStateFrameProgress` also has a `progress` attribute.

### What it does not do

spritefsm only keeps track of state and picks frame values. It does not load images, draw sprites or run a game loop. You call `update` with your frame's time step and display whatever `frame()` returns.

## Running the tests

```
pip install -e ".[test]"
pytest
```