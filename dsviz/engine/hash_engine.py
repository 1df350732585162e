# hash_engine.py
#
# Separate-chaining hash table engine. New keys go to the end of their chain;
# search and delete stop at the first equal key in chain order.

import json


def bucket_index(value, bucket_count):
    return ((value % bucket_count) + bucket_count) % bucket_count


class HashEngine:
    engine_type = "hash"

    def __init__(self):
        self.buckets = None

    def _response(self, action, value=None, outcome=None, steps=None):
        return json.dumps({
            "type": self.engine_type,
            "action": action,
            "value": value,
            "outcome": outcome,
            "snapshot": [{"bucket": i, "chain": list(chain)} for i, chain in enumerate(self.buckets or [])],
            "steps": steps or [],
        })

    def _error(self, message):
        return json.dumps({"type": self.engine_type, "action": "error", "message": message, "steps": []})

    def init(self, buckets):
        if buckets <= 0:
            return self._error(f"Invalid bucket count {buckets}.")
        self.buckets = [[] for _ in range(buckets)]
        return self._response("init", buckets, "initialized",
                              [{"action": "note", "text": f"Hash Table initialized with {buckets} buckets."}])

    def state(self):
        if self.buckets is None:
            return self._error("Hash Table not initialized.")
        return self._response("state")

    def insert(self, value):
        if self.buckets is None:
            return self._error("Hash Table not initialized.")
        index = bucket_index(value, len(self.buckets))
        chain = self.buckets[index]
        chain.append(value)
        steps = [{"action": "place", "bucket": index, "position": len(chain) - 1, "key": value}]
        return self._response("insert", value, "inserted", steps)

    def _probe(self, value, steps):
        """Walk the target chain; returns (bucket, position of first match or None)."""
        index = bucket_index(value, len(self.buckets))
        for position, key in enumerate(self.buckets[index]):
            matched = key == value
            steps.append({"action": "probe", "bucket": index, "position": position, "key": key, "matched": matched})
            if matched:
                return index, position
        return index, None

    def search(self, value):
        if self.buckets is None:
            return self._error("Hash Table not initialized.")
        steps = []
        index, position = self._probe(value, steps)
        if position is None:
            steps.append({"action": "note",
                          "text": f"Value {value} not found after checking {len(steps)} steps in bucket {index}."})
            return self._response("search", value, "not_found", steps)
        steps.append({"action": "note", "text": f"Found value {value} at bucket {index}, step {position + 1}."})
        return self._response("search", value, "found", steps)

    def delete(self, value):
        if self.buckets is None:
            return self._error("Hash Table not initialized.")
        steps = []
        index, position = self._probe(value, steps)
        if position is None:
            steps.append({"action": "note", "text": f"Value {value} not found for deletion."})
            return self._response("delete", value, "not_found", steps)
        del self.buckets[index][position]
        steps.append({"action": "unlink", "bucket": index, "position": position, "key": value})
        return self._response("delete", value, "deleted", steps)


# --- Usage example ---
if __name__ == '__main__':
    engine = HashEngine()
    engine.init(5)
    for value in [7, -3, 12, 0]:
        engine.insert(value)
    print(json.loads(engine.search(12)))
    print(json.loads(engine.delete(-3))["snapshot"])
