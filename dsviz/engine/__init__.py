from .avl_engine import AVLEngine
from .bridge import EngineBridge, EngineResponse, ResponseBuffer, decode_response
from .graph_engine import GraphEngine
from .hash_engine import HashEngine
from .heap_engine import MinHeapEngine
from ..snapshots import StructureKind

ENGINE_CLASSES = {
    StructureKind.TREE: AVLEngine,
    StructureKind.GRAPH: GraphEngine,
    StructureKind.HASH: HashEngine,
    StructureKind.HEAP: MinHeapEngine,
}
