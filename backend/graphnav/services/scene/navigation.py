"""Navigation state machine: current node, tentative neighbor selection, back history.

Selecting a neighbor only previews it; ``COMMIT_FORWARD`` travels there and
``COMMIT_BACKWARD`` pops the history. Inputs that make no sense for the
current state (selection on an isolated node, forward with nothing selected,
back from the start node) are ignored without raising.

Commits that arrive while a camera transition is running are dropped.
Selections are always accepted and restart the running transition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Sequence

from graphnav.models.scene_models import NavigationCommand, NavigationStateView, TransitionKind

logger = logging.getLogger(__name__)

NO_SELECTION = -1


class NavigationPhase(str, Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"


@dataclass(frozen=True)
class NavigationState:
    current_node: int
    selected_index: int = NO_SELECTION
    history: tuple[int, ...] = ()

    @classmethod
    def start(cls, node_id: int) -> NavigationState:
        return cls(current_node=node_id, selected_index=NO_SELECTION, history=(node_id,))

    @property
    def has_selection(self) -> bool:
        return self.selected_index >= 0


@dataclass(frozen=True)
class TransitionRequest:
    """Ask the camera to move to ``node_id``, framing ``target_node`` if set."""

    node_id: int
    kind: TransitionKind
    target_node: int | None = None


def selected_target(state: NavigationState, neighbors: Sequence[int]) -> int | None:
    if state.selected_index < 0 or state.selected_index >= len(neighbors):
        return None
    return neighbors[state.selected_index]


def apply_command(
    state: NavigationState,
    command: NavigationCommand,
    neighbors: Sequence[int],
    transitioning: bool = False,
) -> tuple[NavigationState, TransitionRequest | None]:
    """Pure transition function. Returns the new state and the camera request, if any."""
    count = len(neighbors)

    if command in (NavigationCommand.SELECT_PREVIOUS, NavigationCommand.SELECT_NEXT):
        if count == 0:
            return state, None
        idx = state.selected_index
        if command == NavigationCommand.SELECT_PREVIOUS:
            new_idx = count - 1 if idx < 0 else (idx - 1 + count) % count
        else:
            new_idx = 0 if idx < 0 else (idx + 1) % count
        new_state = replace(state, selected_index=new_idx)
        return new_state, TransitionRequest(
            node_id=state.current_node,
            kind=TransitionKind.ROTATE,
            target_node=neighbors[new_idx],
        )

    if transitioning:
        return state, None

    if command == NavigationCommand.COMMIT_FORWARD:
        target = selected_target(state, neighbors)
        if target is None:
            return state, None
        new_state = NavigationState(
            current_node=target,
            selected_index=NO_SELECTION,
            history=state.history + (target,),
        )
        return new_state, TransitionRequest(node_id=target, kind=TransitionKind.MOVE)

    if command == NavigationCommand.COMMIT_BACKWARD:
        if len(state.history) <= 1:
            return state, None
        history = state.history[:-1]
        new_state = NavigationState(
            current_node=history[-1],
            selected_index=NO_SELECTION,
            history=history,
        )
        return new_state, TransitionRequest(node_id=history[-1], kind=TransitionKind.MOVE)

    raise ValueError(f"Unknown navigation command: {command}")


NavigationListener = Callable[[NavigationState, TransitionRequest], None]


class Navigator:
    """Owns the navigation state for one graph and notifies listeners on change."""

    def __init__(self, neighbors: Callable[[int], Sequence[int]], start_node: int = 0):
        self._neighbors = neighbors
        self._state = NavigationState.start(start_node)
        self._listeners: list[NavigationListener] = []
        self.phase = NavigationPhase.IDLE

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def current_neighbors(self) -> list[int]:
        return list(self._neighbors(self._state.current_node))

    @property
    def target_node(self) -> int | None:
        return selected_target(self._state, self.current_neighbors)

    def subscribe(self, listener: NavigationListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def handle(self, command: NavigationCommand) -> TransitionRequest | None:
        new_state, request = apply_command(
            self._state,
            command,
            self.current_neighbors,
            transitioning=self.phase == NavigationPhase.TRANSITIONING,
        )
        if request is None:
            logger.debug("Ignored %s in state %s (%s)", command.value, self._state, self.phase.value)
            return None
        self._state = new_state
        logger.debug("%s -> node %d, selection %d", command.value, new_state.current_node, new_state.selected_index)
        for listener in list(self._listeners):
            listener(new_state, request)
        return request

    def view(self) -> NavigationStateView:
        return NavigationStateView(
            current_node=self._state.current_node,
            selected_index=self._state.selected_index,
            target_node=self.target_node,
            history=list(self._state.history),
        )
