# controller.py
#
# Operation lifecycle for all four structure views:
#   inputs -> dispatcher/engine -> tracker + layout -> sequencer replay -> renderer
# Only one animation runs at a time across all views.

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional

from .dispatcher import GRAPH_ALGORITHMS, dispatch
from .engine import ENGINE_CLASSES, EngineBridge
from .errors import EngineError, InvalidInputError, MalformedResponseError
from .layout import LayoutEngine
from .renderer import FrameRenderer
from .scheduler import ManualScheduler
from .sequencer import StepSequencer
from .settings import DEFAULT_SETTINGS, canvas_for
from .snapshots import StructureKind
from .status_log import Severity, StatusLog
from .trackers import TRACKER_CLASSES

logger = logging.getLogger(__name__)

# Outcomes reported as warnings rather than successes
WARN_OUTCOMES = {"not_found", "duplicate"}


@dataclass
class Workspace:
    """Everything one structure view owns. Nothing is shared between views."""
    kind: StructureKind
    bridge: EngineBridge
    tracker: Any
    layout_engine: LayoutEngine
    sequencer: Optional[StepSequencer] = None
    operation: Optional[str] = None
    frames: int = 0

    @property
    def snapshot(self):
        return self.tracker.snapshot


def build_workspaces(settings, scheduler, on_step, on_complete, engines=None) -> Dict[StructureKind, Workspace]:
    """
    One Workspace per structure kind, built once at startup. on_step and
    on_complete receive the kind first.
    """
    engines = engines or {}
    workspaces = {}
    for kind in StructureKind:
        engine = engines.get(kind) or ENGINE_CLASSES[kind]()
        workspace = Workspace(
            kind=kind,
            bridge=EngineBridge(engine, kind),
            tracker=TRACKER_CLASSES[kind](),
            layout_engine=LayoutEngine(settings),
        )
        workspace.sequencer = StepSequencer(
            scheduler,
            settings["timing"][kind.value],
            on_step=partial(on_step, kind),
            on_complete=partial(on_complete, kind),
        )
        workspaces[kind] = workspace
    return workspaces


class Visualizer:
    def __init__(self, settings=None, scheduler=None, renderer=None, engines=None,
                 on_frame: Optional[Callable] = None, status: Optional[StatusLog] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.scheduler = scheduler or ManualScheduler()
        self.renderer = renderer or FrameRenderer()
        self.on_frame = on_frame
        self.status = status or StatusLog()
        self.workspaces = build_workspaces(self.settings, self.scheduler, self._on_step, self._on_complete, engines)
        self.active = StructureKind.TREE
        self.last_frame = None

    # --- Affordances ---

    @property
    def busy(self):
        return any(ws.sequencer.is_running for ws in self.workspaces.values())

    @property
    def controls_enabled(self):
        return not self.busy

    def workspace(self, kind) -> Workspace:
        return self.workspaces[StructureKind(kind)]

    def switch_view(self, kind):
        """Make kind the active view; the status stream starts over."""
        kind = StructureKind(kind)
        self.active = kind
        self.status.clear()
        self.status.set_aux_line(self.workspaces[kind].tracker.state.aux_line)
        return self.redraw(kind)

    # --- Operations ---

    def perform(self, kind, operation, inputs=None) -> bool:
        """
        Run one operation and start replaying its steps. Returns False, with
        every tracker, layout and sequencer untouched, when the operation is
        rejected or fails.
        """
        kind = StructureKind(kind)
        if self.busy:
            self.status.warn(f"Animation in progress; '{operation}' rejected.")
            return False
        if kind is not self.active:
            self.switch_view(kind)

        workspace = self.workspaces[kind]
        try:
            response, focus = dispatch(
                workspace.bridge, kind, operation, inputs,
                snapshot=workspace.snapshot,
                defaults=self.settings["engine"],
                warn=self.status.warn,
            )
        except InvalidInputError as e:
            self.status.warn(str(e))
            return False
        except EngineError as e:
            self.status.error(e.reason)
            return False
        except MalformedResponseError as e:
            self.status.error(f"Failed to parse engine response: {e}")
            return False

        # The response is fully parsed and validated; state changes start here
        self._report(operation, response)
        tracker = workspace.tracker
        before = tracker.snapshot
        tracker.begin(operation, focus)
        tracker.set_snapshot(tracker.replay_snapshot(before, response.snapshot))
        workspace.operation = operation
        if operation in GRAPH_ALGORITHMS:
            self.status.success(f"{operation.upper()} started from node {focus}.")
        self.status.set_aux_line(tracker.state.aux_line)
        self.redraw(kind)
        workspace.sequencer.start(response.steps, response.snapshot)
        return True

    def _report(self, operation, response):
        if response.outcome in WARN_OUTCOMES:
            self.status.warn(f"{operation.upper()}: value {response.value} {response.outcome.replace('_', ' ')}.")
        else:
            self.status.success(f"Action: {operation.upper()} -> Value: {response.value}")

    def _on_step(self, kind, record):
        tracker = self.workspaces[kind].tracker
        if tracker.apply_step(record):
            self.status.append(record.describe(), Severity.DETAIL)
        self.status.set_aux_line(tracker.state.aux_line)
        self.redraw(kind)

    def _on_complete(self, kind, final_snapshot):
        workspace = self.workspaces[kind]
        tracker = workspace.tracker
        if final_snapshot is not None:
            tracker.set_snapshot(final_snapshot)
        tracker.complete()
        if workspace.operation in GRAPH_ALGORITHMS:
            self.status.success(f"{workspace.operation.upper()} Complete!")
        else:
            self.status.success(f"{(workspace.operation or 'operation').upper()} complete.")
        workspace.operation = None
        self.redraw(kind)

    # --- Drawing ---

    def redraw(self, kind=None):
        """Render the current frame of a view; canvas size is read once per redraw."""
        kind = StructureKind(kind) if kind is not None else self.active
        workspace = self.workspaces[kind]
        width, height = canvas_for(self.settings, kind.value)
        layout = workspace.layout_engine.layout_for(workspace.snapshot, width, height)
        frame = self.renderer.render(workspace.tracker, layout, width, height)
        workspace.frames += 1
        self.last_frame = frame
        if self.on_frame is not None:
            self.on_frame(kind, frame)
        return frame

    def shutdown(self):
        """Stop every running animation without completing it; returns how many were stopped."""
        stopped = sum(1 for ws in self.workspaces.values() if ws.sequencer.stop())
        if stopped:
            logger.info(f"Stopped {stopped} running animation(s)")
        return stopped
