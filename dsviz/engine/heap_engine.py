# heap_engine.py
#
# Bounded binary min-heap engine. Every sift step is reported with the array
# as it is after the step.

import json


class MinHeapEngine:
    engine_type = "minheap"

    def __init__(self):
        self.capacity = None
        self.values = []

    def _response(self, action, value=None, outcome=None, steps=None):
        return json.dumps({
            "type": self.engine_type,
            "action": action,
            "value": value,
            "outcome": outcome,
            "snapshot": list(self.values),
            "steps": steps or [],
        })

    def _error(self, message):
        return json.dumps({"type": self.engine_type, "action": "error", "message": message, "steps": []})

    def _swap_step(self, index, other_index):
        # values[other_index] is the moving value once the swap is done
        return {
            "action": "heap_swap",
            "index": index,
            "other_index": other_index,
            "value": self.values[other_index],
            "other": self.values[index],
            "heap": list(self.values),
        }

    def init(self, capacity):
        if capacity <= 0:
            return self._error(f"Invalid capacity {capacity}.")
        self.capacity = capacity
        self.values = []
        return self._response("init", capacity, "initialized",
                              [{"action": "note", "text": f"Min Heap initialized with capacity {capacity}."}])

    def state(self):
        if self.capacity is None:
            return self._error("Heap not initialized.")
        return self._response("state")

    def insert(self, value):
        if self.capacity is None:
            return self._error("Heap not initialized.")
        if len(self.values) >= self.capacity:
            return self._error("Heap is full.")

        # 1. Place at the last slot
        self.values.append(value)
        i = len(self.values) - 1
        steps = [{"action": "heap_place", "index": i, "value": value, "heap": list(self.values)}]

        # 2. Sift up
        while i > 0:
            parent = (i - 1) // 2
            if self.values[i] >= self.values[parent]:
                break
            self.values[i], self.values[parent] = self.values[parent], self.values[i]
            steps.append(self._swap_step(i, parent))
            i = parent
        return self._response("insert", value, "inserted", steps)

    def extract(self):
        if self.capacity is None:
            return self._error("Heap not initialized.")
        if not self.values:
            return self._error("Heap is empty.")

        # 1. Move the last element to the root
        minimum = self.values[0]
        last = self.values.pop()
        steps = [{"action": "note", "text": f"Extracted minimum value {minimum}."}]
        if not self.values:
            return self._response("extract", minimum, "extracted", steps)
        self.values[0] = last
        steps.append({"action": "heap_place", "index": 0, "value": last, "heap": list(self.values)})

        # 2. Sift down
        i, n = 0, len(self.values)
        while 2 * i + 1 < n:
            smallest = 2 * i + 1
            right = smallest + 1
            if right < n and self.values[right] < self.values[smallest]:
                smallest = right
            if self.values[i] <= self.values[smallest]:
                break
            self.values[i], self.values[smallest] = self.values[smallest], self.values[i]
            steps.append(self._swap_step(i, smallest))
            i = smallest
        return self._response("extract", minimum, "extracted", steps)


# --- Usage example ---
if __name__ == '__main__':
    engine = MinHeapEngine()
    engine.init(15)
    for value in [5, 3, 8, 1]:
        print(json.loads(engine.insert(value))["steps"])
    print(json.loads(engine.extract()))
