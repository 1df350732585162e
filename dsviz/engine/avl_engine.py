# avl_engine.py
#
# AVL tree engine. Every call returns the JSON response text
#   {"type": "avl", "action", "value", "outcome", "snapshot", "steps"}
# where snapshot is the whole tree as nested {"data", "h", "b", "l", "r"}.

import json


class _Node:
    __slots__ = ("data", "left", "right", "height")

    def __init__(self, data):
        self.data = data
        self.left = None
        self.right = None
        self.height = 1


def _height(node):
    return node.height if node is not None else 0


def _balance(node):
    return _height(node.left) - _height(node.right) if node is not None else 0


def _update(node):
    node.height = 1 + max(_height(node.left), _height(node.right))


def _rotate_right(z):
    y = z.left
    z.left = y.right
    y.right = z
    _update(z)
    _update(y)
    return y


def _rotate_left(z):
    y = z.right
    z.right = y.left
    y.left = z
    _update(z)
    _update(y)
    return y


def _note(text, focus=None):
    step = {"action": "note", "text": text}
    if focus is not None:
        step["focus"] = focus
    return step


def _rotation(pivot, case, after_delete=False):
    return {"action": "rotation", "pivot": pivot, "case": case, "after_delete": after_delete}


def serialize_tree(node):
    if node is None:
        return None
    return {
        "data": node.data,
        "h": node.height,
        "b": _balance(node),
        "l": serialize_tree(node.left),
        "r": serialize_tree(node.right),
    }


class AVLEngine:
    engine_type = "avl"

    def __init__(self):
        self.root = None
        self.initialized = False

    def _response(self, action, value=None, outcome=None, steps=None):
        return json.dumps({
            "type": self.engine_type,
            "action": action,
            "value": value,
            "outcome": outcome,
            "snapshot": serialize_tree(self.root),
            "steps": steps or [],
        })

    def _error(self, message):
        return json.dumps({"type": self.engine_type, "action": "error", "message": message, "steps": []})

    # --- Operations ---

    def init(self):
        self.root = None
        self.initialized = True
        return self._response("init", outcome="initialized", steps=[_note("AVL Tree initialized.")])

    def state(self):
        if not self.initialized:
            return self._error("AVL Tree not initialized.")
        return self._response("state")

    def insert(self, key):
        if not self.initialized:
            return self._error("AVL Tree not initialized.")
        steps = []
        self.root, inserted = self._insert(self.root, key, steps)
        return self._response("insert", key, "inserted" if inserted else "duplicate", steps)

    def delete(self, key):
        if not self.initialized:
            return self._error("AVL Tree not initialized.")
        steps = []
        self.root, deleted = self._delete(self.root, key, steps)
        return self._response("delete", key, "deleted" if deleted else "not_found", steps)

    # --- Recursive helpers ---

    def _insert(self, node, key, steps):
        # 1. Plain BST insertion
        if node is None:
            steps.append(_note(f"Inserted node {key}.", key))
            return _Node(key), True
        if key < node.data:
            node.left, inserted = self._insert(node.left, key, steps)
        elif key > node.data:
            node.right, inserted = self._insert(node.right, key, steps)
        else:
            steps.append(_note(f"Double value {key} is not allowed.", key))
            return node, False

        # 2. Height, then rebalance by where the key went
        _update(node)
        balance = _balance(node)
        if balance > 1:
            if key < node.left.data:
                steps.append(_rotation(node.data, "LL"))
                return _rotate_right(node), inserted
            steps.append(_rotation(node.data, "LR"))
            node.left = _rotate_left(node.left)
            return _rotate_right(node), inserted
        if balance < -1:
            if key > node.right.data:
                steps.append(_rotation(node.data, "RR"))
                return _rotate_left(node), inserted
            steps.append(_rotation(node.data, "RL"))
            node.right = _rotate_right(node.right)
            return _rotate_left(node), inserted
        return node, inserted

    def _delete(self, node, key, steps):
        # 1. Find and unlink
        if node is None:
            steps.append(_note(f"Key {key} not found for deletion."))
            return None, False
        if key < node.data:
            node.left, deleted = self._delete(node.left, key, steps)
        elif key > node.data:
            node.right, deleted = self._delete(node.right, key, steps)
        else:
            deleted = True
            if node.left is None or node.right is None:
                child = node.left or node.right
                if child is None:
                    steps.append(_note(f"Deleting leaf node {node.data}.", node.data))
                    return None, True
                steps.append(_note(f"Deleting node {node.data}, replacing with single child {child.data}.", child.data))
                return child, True
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            steps.append(_note(f"Deleting node {node.data}, replacing with successor {successor.data}.", successor.data))
            node.data = successor.data
            node.right, _ = self._delete(node.right, successor.data, steps)

        # 2. Height, then rebalance by the heavy child's balance
        _update(node)
        balance = _balance(node)
        if balance > 1:
            if _balance(node.left) >= 0:
                steps.append(_rotation(node.data, "LL", after_delete=True))
                return _rotate_right(node), deleted
            steps.append(_rotation(node.data, "LR", after_delete=True))
            node.left = _rotate_left(node.left)
            return _rotate_right(node), deleted
        if balance < -1:
            if _balance(node.right) <= 0:
                steps.append(_rotation(node.data, "RR", after_delete=True))
                return _rotate_left(node), deleted
            steps.append(_rotation(node.data, "RL", after_delete=True))
            node.right = _rotate_right(node.right)
            return _rotate_left(node), deleted
        return node, deleted


# --- Usage example ---
if __name__ == '__main__':
    engine = AVLEngine()
    engine.init()
    for value in [10, 20, 30, 25, 28]:
        response = json.loads(engine.insert(value))
        print(f"insert {value}: {response['outcome']}, {len(response['steps'])} steps")
    print(json.dumps(json.loads(engine.state())["snapshot"], indent=2))
