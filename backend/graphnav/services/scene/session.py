"""One running visualization: graph, layout, navigator and camera on a single tick loop.

Per tick the layout steps first, then the camera, then frame listeners see
the result. Input is handled between ticks.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from graphnav.models.scene_models import (
    EdgeRole,
    EdgeView,
    LayoutConfig,
    NavigationCommand,
    NodeRole,
    NodeView,
    SceneFrame,
)
from graphnav.services.graph_model import Graph
from graphnav.services.notes_panel import NotesPanel
from graphnav.services.scene.camera import CameraController
from graphnav.services.scene.layout import ForceLayout
from graphnav.services.scene.navigation import (
    NavigationPhase,
    NavigationState,
    Navigator,
    TransitionRequest,
)
from graphnav.services.scene_config import DEFAULT_TICK

logger = logging.getLogger(__name__)

FrameListener = Callable[[SceneFrame], None]


class GraphSession:
    def __init__(
        self,
        graph: Graph,
        layout_config: LayoutConfig | None = None,
        start_node: int = 0,
        anchor: int | None = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.graph = graph
        self._clock = clock
        self.layout = ForceLayout(graph, layout_config, anchor=anchor)
        self.navigator = Navigator(graph.neighbors, start_node=start_node)
        self.camera = CameraController(graph, clock=clock)
        self.camera.place(start_node)
        self._controls_enabled = True
        self._frame_listeners: list[FrameListener] = []
        self.notes_panel: NotesPanel | None = None

    # --- input ---

    @property
    def controls_enabled(self) -> bool:
        return self._controls_enabled

    def set_controls_enabled(self, enabled: bool) -> None:
        """Disable while a text field has focus: navigation keys are ignored and the layout pauses."""
        self._controls_enabled = enabled
        self.layout.paused = not enabled
        logger.debug("Controls %s", "enabled" if enabled else "disabled")

    def handle_command(self, command: NavigationCommand, now: float | None = None) -> TransitionRequest | None:
        if not self._controls_enabled:
            return None
        self._sync_phase()
        request = self.navigator.handle(command)
        if request is not None:
            self.camera.request(request, now=now)
            self._sync_phase()
        return request

    def on_navigation(self, listener: Callable[[NavigationState, TransitionRequest], None]) -> Callable[[], None]:
        return self.navigator.subscribe(listener)

    def on_frame(self, listener: FrameListener) -> Callable[[], None]:
        self._frame_listeners.append(listener)
        return lambda: self._frame_listeners.remove(listener)

    # --- notes panel ---

    def attach_notes_panel(self, panel: NotesPanel) -> Callable[[], None]:
        """Keep ``panel`` pointed at the current node as navigation moves."""
        self.notes_panel = panel
        panel.show(self.current_label)

        def follow(state: NavigationState, request: TransitionRequest) -> None:
            label = self.graph.node(state.current_node).label
            if panel.label != label:
                panel.show(label)

        return self.on_navigation(follow)

    def toggle_notes_panel(self) -> bool:
        """Open or close the attached panel. Navigation is off while it is open."""
        if self.notes_panel is None:
            logger.debug("No notes panel attached")
            return False
        visible = self.notes_panel.toggle(self.current_label)
        self.set_controls_enabled(not visible)
        return visible

    # --- loop ---

    def tick(self, dt: float = DEFAULT_TICK, now: float | None = None) -> SceneFrame:
        self.layout.step(dt)
        self.camera.update(now)
        self._sync_phase()
        frame = self.frame()
        for listener in list(self._frame_listeners):
            listener(frame)
        return frame

    def _sync_phase(self) -> None:
        self.navigator.phase = (
            NavigationPhase.TRANSITIONING if self.camera.transitioning else NavigationPhase.IDLE
        )

    # --- rendering snapshot ---

    def frame(self) -> SceneFrame:
        state = self.navigator.state
        current = state.current_node
        target = self.navigator.target_node
        neighbors = set(self.graph.neighbors(current))

        nodes = []
        for node in self.graph.all_nodes():
            if node.id == current:
                role = NodeRole.CURRENT
            elif node.id == target:
                role = NodeRole.TARGET
            elif node.id in neighbors:
                role = NodeRole.NEIGHBOR
            else:
                role = NodeRole.UNCONNECTED
            nodes.append(
                NodeView(
                    id=node.id,
                    label=node.label,
                    position=tuple(float(v) for v in self.graph.positions[node.id]),
                    role=role,
                )
            )

        edges = []
        for a, b in self.graph.edges():
            if target is not None and {a, b} == {current, target}:
                role = EdgeRole.HIGHLIGHT
            elif current in (a, b):
                role = EdgeRole.CONNECTED
            else:
                role = EdgeRole.UNCONNECTED
            edges.append(EdgeView(source=a, target=b, role=role))

        return SceneFrame(
            nodes=nodes,
            edges=edges,
            camera=self.camera.pose.view(),
            navigation=self.navigator.view(),
            transitioning=self.camera.transitioning,
            layout_paused=self.layout.paused,
        )

    @property
    def current_label(self) -> str:
        return self.graph.node(self.navigator.state.current_node).label
