"""Step-by-step visualizer for AVL trees, graphs, hash tables and min-heaps."""

from .controller import Visualizer, Workspace, build_workspaces
from .renderer import FrameRecorder, FrameRenderer
from .scheduler import ManualScheduler, RealtimeScheduler
from .settings import DEFAULT_SETTINGS, load_settings
from .snapshots import StructureKind

__version__ = "0.1.0"
