import json
import logging
from pathlib import Path

from algostep.elements import coerce_value, format_value
from algostep.snapshot import snapshot

logger = logging.getLogger(__name__)


class NodeIdAllocator:
    """
    Hands out node ids 0, 1, 2, ... for one tree lifetime.
    Ids are never reused until reset() is called.
    """

    def __init__(self, start=0):
        self._next = start

    def next_id(self):
        node_id = self._next
        self._next += 1
        return node_id

    @property
    def peek(self):
        return self._next

    def reset(self):
        self._next = 0


DEFAULT_ALLOCATOR = NodeIdAllocator()


def reset_node_id_counter(allocator=None):
    """Restart id allocation; call it when the caller throws the whole tree away."""
    (allocator or DEFAULT_ALLOCATOR).reset()


class BSTNode:
    def __init__(self, value, allocator=None):
        self.id = (allocator or DEFAULT_ALLOCATOR).next_id()
        self.value = value
        self.left = None
        self.right = None

    def to_dict(self):
        """Nested plain-dict copy of this subtree, built with an explicit stack."""
        out = {"id": self.id, "value": self.value, "left": None, "right": None}
        stack = [(self, out)]
        while stack:
            node, copied = stack.pop()
            for side in ("left", "right"):
                child = getattr(node, side)
                if child is not None:
                    copied[side] = {"id": child.id, "value": child.value, "left": None, "right": None}
                    stack.append((child, copied[side]))
        return out

    def __repr__(self):
        return f"BSTNode(id={self.id}, value={self.value!r})"


def _step(root, action, message, highlighted=()):
    return {
        "root": snapshot(root),
        "action": action,
        "message": message,
        "highlighted": list(highlighted),
    }


# =================================================================
# Insert
# =================================================================

def bst_insert_steps(root, value, allocator=None):
    """
    Insert `value` and trace the descent.
    Equal values go right. The `insert` step already shows the new node linked in.
    Returns {"root": new_root, "steps": [...]}.
    """
    value = coerce_value(value)
    steps = []
    new_node = None

    if root is None:
        new_node = BSTNode(value, allocator)
        root = new_node
    else:
        node = root
        while new_node is None:
            steps.append(_step(root, "compare", f"Comparing {format_value(value)} with {format_value(node.value)}", [node.id]))
            if value < node.value:
                if node.left is None:
                    new_node = node.left = BSTNode(value, allocator)
                else:
                    node = node.left
            else:
                if node.right is None:
                    new_node = node.right = BSTNode(value, allocator)
                else:
                    node = node.right

    steps.append(_step(root, "insert", f"Inserted {format_value(value)} as a new node", [new_node.id]))
    steps.append(_step(root, "done", "Insertion complete"))
    logger.debug("Inserted %s as node %d (%d steps)", value, new_node.id, len(steps))
    return {"root": root, "steps": steps}


# =================================================================
# Delete
# =================================================================

def _find_min(node):
    while node.left:
        node = node.left
    return node


def bst_delete_steps(root, value):
    """
    Delete one node holding `value` and trace it.

    Leaf: unlinked. One child: replaced by that child. Two children: the in-order
    successor's value is copied in, then the successor is deleted from the right
    subtree. Deleting from an empty tree is a no-op with no steps.
    Returns {"root": new_root, "steps": [...]}.
    """
    if root is None:
        return {"root": None, "steps": []}

    value = coerce_value(value)
    steps = []
    new_root = root

    # (parent, side) is the link that points at `node`; parent None means the root
    parent, side = None, None
    node = root
    while node is not None:
        steps.append(_step(root, "compare", f"Comparing {format_value(value)} with {format_value(node.value)}", [node.id]))

        if value < node.value:
            parent, side, node = node, "left", node.left
            continue
        if value > node.value:
            parent, side, node = node, "right", node.right
            continue

        steps.append(_step(root, "delete", f"Deleting node {format_value(node.value)}", [node.id]))

        if node.left is not None and node.right is not None:
            successor = _find_min(node.right)
            steps.append(_step(
                root, "replace",
                f"Replacing {format_value(node.value)} with inorder successor {format_value(successor.value)}",
                [node.id, successor.id],
            ))
            node.value = successor.value
            # >> Delta: continue by deleting the successor's value from the right subtree <<
            value = successor.value
            parent, side, node = node, "right", node.right
            continue

        child = node.left if node.left is not None else node.right
        if parent is None:
            new_root = child
        else:
            setattr(parent, side, child)
        break

    steps.append(_step(new_root, "done", "Deletion complete"))
    return {"root": new_root, "steps": steps}


# =================================================================
# Search
# =================================================================

def bst_search_steps(root, value):
    """Trace a lookup of `value`; never mutates. Returns {"steps": [...]}."""
    value = coerce_value(value)
    steps = []
    node = root

    while True:
        if node is None:
            steps.append(_step(root, "not_found", f"{format_value(value)} not found in tree"))
            break

        steps.append(_step(root, "compare", f"Comparing {format_value(value)} with {format_value(node.value)}", [node.id]))

        if value == node.value:
            steps.append(_step(root, "found", f"Found {format_value(value)}!", [node.id]))
            break

        node = node.left if value < node.value else node.right

    steps.append(_step(root, "done", "Search complete"))
    return {"steps": steps}


# =================================================================
# Helpers
# =================================================================

def inorder_values(root):
    values = []
    stack = []
    node = root
    while stack or node:
        while node:
            stack.append(node)
            node = node.left
        node = stack.pop()
        values.append(node.value)
        node = node.right
    return values


def is_bst(root):
    """Left subtree strictly smaller, right subtree greater or equal (duplicates go right)."""
    stack = [(root, None, None)]
    while stack:
        node, low, high = stack.pop()
        if node is None:
            continue
        if low is not None and node.value < low:
            return False
        if high is not None and node.value >= high:
            return False
        stack.append((node.left, low, node.value))
        stack.append((node.right, node.value, high))
    return True


class BSTSession:
    """
    Owns one tree and its id allocator across operations.
    Delete and search on an empty tree are skipped with an empty trace.
    """

    def __init__(self, allocator=None):
        self.allocator = allocator or NodeIdAllocator()
        self.root = None

    def insert(self, value):
        result = bst_insert_steps(self.root, value, self.allocator)
        self.root = result["root"]
        return result["steps"]

    def insert_many(self, values):
        steps = []
        for value in values:
            steps.extend(self.insert(value))
        return steps

    def delete(self, value):
        if self.root is None:
            logger.info("Delete of %s skipped: tree is empty", value)
            return []
        result = bst_delete_steps(self.root, value)
        self.root = result["root"]
        return result["steps"]

    def search(self, value):
        if self.root is None:
            logger.info("Search for %s skipped: tree is empty", value)
            return []
        return bst_search_steps(self.root, value)["steps"]

    def reset(self):
        self.root = None
        self.allocator.reset()

    def inorder(self):
        return inorder_values(self.root)


# --- Usage example ---
if __name__ == '__main__':
    session = BSTSession()
    steps = session.insert_many([7, 3, 9, 1, 5])
    steps += session.search(5)
    steps += session.delete(3)

    output_dir = Path("trace_output/tree")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "bst_steps.json"

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(steps, f, indent=2, ensure_ascii=False)

    print(f"{len(steps)} steps saved to: {output_path}, in-order: {session.inorder()}")
