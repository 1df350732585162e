# graph_engine.py
#
# Weighted directed graph engine with BFS, DFS, Dijkstra and Prim.
# Adjacency lists are head-inserted, so the newest edge out of a vertex comes
# first, both in traversal order and in the serialized edge list.

import heapq
import itertools
import json
from collections import deque

INF = float("inf")


def _array(values):
    # Infinity has no JSON literal
    return ["INF" if v == INF else v for v in values]


class _PriorityQueue:
    """Min-heap of (metric, vertex); serialized in heap array order."""

    def __init__(self):
        self._heap = []
        self._counter = itertools.count()

    def push(self, vertex, metric):
        heapq.heappush(self._heap, (metric, next(self._counter), vertex))

    def pop(self):
        metric, _, vertex = heapq.heappop(self._heap)
        return vertex, metric

    def __bool__(self):
        return bool(self._heap)

    def to_json(self):
        return [{"v": vertex, "d": metric} for metric, _, vertex in self._heap]


class GraphEngine:
    engine_type = "graph"

    def __init__(self):
        self.vertex_count = 0
        self.adjacency = None

    def _response(self, action, value=None, outcome=None, steps=None):
        return json.dumps({
            "type": self.engine_type,
            "action": action,
            "value": value,
            "outcome": outcome,
            "snapshot": {"vertices": self.vertex_count, "edges": self.edges()},
            "steps": steps or [],
        })

    def _error(self, message):
        return json.dumps({"type": self.engine_type, "action": "error", "message": message, "steps": []})

    def _check(self, *vertices):
        if self.adjacency is None:
            return "Graph not initialized."
        for v in vertices:
            if not 0 <= v < self.vertex_count:
                return f"Invalid vertex {v}: graph has {self.vertex_count} vertices."
        return None

    def edges(self):
        if self.adjacency is None:
            return []
        return [{"f": f, "t": t, "w": w} for f in range(self.vertex_count) for t, w in self.adjacency[f]]

    def _final_edges(self, parent, weight):
        # weight[v] is the weight of the edge parent[v] -> v that was kept
        return [
            {"f": parent[v], "t": v, "w": weight[v]}
            for v in range(self.vertex_count) if parent[v] != -1
        ]

    # --- Structure operations ---

    def init(self, vertices):
        if vertices < 0:
            return self._error(f"Invalid vertex count {vertices}.")
        self.vertex_count = vertices
        self.adjacency = [[] for _ in range(vertices)]
        return self._response("init", vertices, "initialized")

    def state(self):
        if self.adjacency is None:
            return self._error("Graph not initialized.")
        return self._response("state", self.vertex_count)

    def add_edge(self, source, target, weight):
        error = self._check(source, target)
        if error:
            return self._error(error)
        self.adjacency[source].insert(0, (target, weight))
        return self._response("add_edge", weight, "added",
                              [{"action": "note", "text": f"Added edge {source} -> {target} (w={weight}).", "focus": source}])

    def remove_edge(self, source, target):
        error = self._check(source, target)
        if error:
            return self._error(error)
        out = self.adjacency[source]
        for i, (t, _) in enumerate(out):
            if t == target:
                del out[i]
                return self._response("remove_edge", target, "removed",
                                      [{"action": "note", "text": f"Removed edge {source} -> {target}.", "focus": source}])
        return self._response("remove_edge", target, "not_found",
                              [{"action": "note", "text": f"Edge {source} -> {target} not found."}])

    def remove_vertex(self, vertex):
        """Drop every edge touching vertex; the vertex itself stays, isolated."""
        error = self._check(vertex)
        if error:
            return self._error(error)
        self.adjacency[vertex] = []
        for f in range(self.vertex_count):
            if f != vertex:
                self.adjacency[f] = [(t, w) for t, w in self.adjacency[f] if t != vertex]
        return self._response("remove_vertex", vertex, "removed",
                              [{"action": "note", "text": f"Removed all edges of vertex {vertex}.", "focus": vertex}])

    # --- Algorithms ---

    def run_bfs(self, start):
        error = self._check(start)
        if error:
            return self._error(error)
        steps = []
        visited = [False] * self.vertex_count
        queue = deque([start])
        visited[start] = True

        # 1. Start vertex
        steps.append({"action": "note", "text": f"Initialized BFS. Start node: {start}."})
        steps.append({"action": "enqueue", "v": start, "q": list(queue)})

        # 2. Main loop
        while queue:
            u = queue.popleft()
            steps.append({"action": "dequeue", "v": u, "q": list(queue)})
            for v, _ in self.adjacency[u]:
                if not visited[v]:
                    visited[v] = True
                    queue.append(v)
                    steps.append({"action": "enqueue", "v": v, "q": list(queue), "edge": [u, v]})
        return self._response("bfs", start, "completed", steps)

    def run_dfs(self, start):
        error = self._check(start)
        if error:
            return self._error(error)
        steps = []
        # 0 = unvisited, 1 = on stack, 2 = visited
        state = [0] * self.vertex_count
        stack = [start]
        state[start] = 1

        def stack_json():
            # Top of stack first
            return list(reversed(stack))

        # 1. Start vertex
        steps.append({"action": "note", "text": f"Initialized DFS. Start node: {start}."})
        steps.append({"action": "push", "v": start, "s": stack_json()})

        # 2. The top vertex pushes one unvisited neighbour at a time,
        #    and is popped once it has none left
        while stack:
            u = stack[-1]
            if state[u] != 2:
                state[u] = 2
                steps.append({"action": "visit", "v": u, "s": stack_json()})

            pushed = False
            for v, _ in self.adjacency[u]:
                if state[v] == 0:
                    stack.append(v)
                    state[v] = 1
                    pushed = True
                    steps.append({"action": "push", "v": v, "s": stack_json(), "edge": [u, v]})
                    break
            if not pushed:
                stack.pop()
                steps.append({"action": "pop", "v": u, "s": stack_json(), "backtrack": True})
        return self._response("dfs", start, "completed", steps)

    def run_dijkstra(self, start):
        error = self._check(start)
        if error:
            return self._error(error)
        n = self.vertex_count
        dist = [INF] * n
        parent = [-1] * n
        weight = [0] * n
        finalized = [False] * n
        pq = _PriorityQueue()
        steps = []

        # 1. Source
        dist[start] = 0
        pq.push(start, 0)
        steps.append({"action": "note", "text": f"Initialized Dijkstra's. Start node: {start}."})
        steps.append({"action": "relax", "v": start, "pq": pq.to_json(), "dist": _array(dist)})

        # 2. Main loop
        while pq:
            u, _ = pq.pop()
            if finalized[u]:
                continue
            finalized[u] = True
            steps.append({"action": "extract_min", "v": u, "pq": pq.to_json(), "dist": _array(dist)})
            for v, w in self.adjacency[u]:
                if not finalized[v] and dist[u] + w < dist[v]:
                    dist[v] = dist[u] + w
                    parent[v] = u
                    weight[v] = w
                    pq.push(v, dist[v])
                    steps.append({"action": "relax", "v": v, "pq": pq.to_json(), "dist": _array(dist), "edge": [u, v]})

        # 3. Shortest-path tree
        steps.append({"action": "note", "text": "Dijkstra's complete. Final shortest paths calculated."})
        steps.append({
            "action": "final_result",
            "final_dist": _array(dist),
            "final_sp_edges": self._final_edges(parent, weight),
        })
        return self._response("dijkstra", start, "completed", steps)

    def run_prims(self, start):
        error = self._check(start)
        if error:
            return self._error(error)
        n = self.vertex_count
        key = [INF] * n
        parent = [-1] * n
        weight = [0] * n
        in_mst = [False] * n
        pq = _PriorityQueue()
        steps = []
        total_cost = 0

        # 1. Start vertex
        key[start] = 0
        pq.push(start, 0)
        steps.append({"action": "note", "text": f"Initialized Prim's. Start node: {start}."})
        steps.append({"action": "key_update", "v": start, "pq": pq.to_json(), "key": _array(key)})

        # 2. Main loop
        while pq:
            u, current_key = pq.pop()
            if in_mst[u]:
                continue
            in_mst[u] = True
            if parent[u] != -1:
                total_cost += current_key
            steps.append({"action": "extract_min", "v": u, "pq": pq.to_json(), "key": _array(key)})
            for v, w in self.adjacency[u]:
                if not in_mst[v] and w < key[v]:
                    key[v] = w
                    parent[v] = u
                    weight[v] = w
                    pq.push(v, w)
                    steps.append({"action": "key_update", "v": v, "pq": pq.to_json(), "key": _array(key), "edge": [u, v]})

        # 3. Spanning tree
        steps.append({"action": "note", "text": f"Prim's complete. Total MST Cost: {total_cost}"})
        steps.append({
            "action": "final_result",
            "final_cost": total_cost,
            "final_key": _array(key),
            "final_mst_edges": self._final_edges(parent, weight),
        })
        return self._response("prims", start, "completed", steps)


# --- Usage example ---
if __name__ == '__main__':
    engine = GraphEngine()
    engine.init(5)
    for f, t, w in [(0, 1, 4), (0, 2, 1), (2, 1, 2), (1, 3, 1), (2, 3, 5), (3, 4, 3)]:
        engine.add_edge(f, t, w)
    response = json.loads(engine.run_dijkstra(0))
    for step in response["steps"]:
        print(step)
