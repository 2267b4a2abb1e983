import json
from pathlib import Path

from algostep.elements import normalize_elements
from algostep.snapshot import snapshot


def build_recursion_tree(arr, left, right):
    """
    Build the whole merge sort recursion tree for arr[left..right] up front.
    A node's id is its index range ("left-right"), which never changes during a run.
    """
    node = {
        "id": f"{left}-{right}",
        "leftIndex": left,
        "rightIndex": right,
        "array": snapshot(arr[left:right + 1]),
        "left": None,
        "right": None,
        "merged": False,
    }
    if left < right:
        mid = (left + right) // 2
        node["left"] = build_recursion_tree(arr, left, mid)
        node["right"] = build_recursion_tree(arr, mid + 1, right)
    return node


def iter_merge_sort_steps(initial_array: list):
    """
    Yield the merge sort trace over a persistent recursion tree.

    Every step carries a detached copy of the tree and of the flat working array,
    plus an `action` describing what just happened:
      start / split / leaf / compare / place / merged / done
    `place` names the element id, the child it came from and its offset inside the
    parent slice so a renderer can fly that exact item from child to parent.
    """

    # =================================================================
    # 1. Normalize input and build the tree once
    # =================================================================

    arr = normalize_elements(initial_array)
    n = len(arr)
    root = build_recursion_tree(arr, 0, n - 1) if n else None

    def record(action, done=False):
        return {
            "tree": snapshot(root),
            "array": snapshot(arr),
            "action": action,
            "done": done,
        }

    yield record({"type": "start"})

    # =================================================================
    # 2. Walk the tree with an explicit stack of (node, stage)
    # =================================================================

    # a single element is already sorted: nothing to split, no leaf step
    call_stack = [(root, 'split')] if n > 1 else []

    while call_stack:
        node, stage = call_stack.pop()
        left, right = node["leftIndex"], node["rightIndex"]

        if stage == 'split':
            if left >= right:
                yield record({"type": "leaf", "nodeId": node["id"]})
                continue

            mid = (left + right) // 2
            yield record({"type": "split", "nodeId": node["id"], "left": left, "mid": mid, "right": right})

            # pushed in reverse: merge runs after both halves, left half first
            call_stack.append((node, 'merge'))
            call_stack.append((node["right"], 'split'))
            call_stack.append((node["left"], 'split'))

        elif stage == 'merge':
            mid = (left + right) // 2
            yield from _merge(node, arr, left, mid, right, record)

            node["merged"] = True
            yield record({"type": "merged", "nodeId": node["id"], "left": left, "mid": mid, "right": right})

    yield record({"type": "done"}, done=True)


def _merge(node, arr, left, mid, right, record):
    L = [dict(x) for x in arr[left:mid + 1]]
    R = [dict(x) for x in arr[mid + 1:right + 1]]
    left_child_id = node["left"]["id"] if node["left"] else None
    right_child_id = node["right"]["id"] if node["right"] else None

    # the parent range empties into the L and R buffers and refills slot by slot,
    # so no id ever shows up twice in the working array
    arr[left:right + 1] = [None] * (right - left + 1)
    node["array"] = snapshot(arr[left:right + 1])

    i, j, k = 0, 0, left

    def place(chosen, from_node_id, pos):
        arr[pos] = dict(chosen)
        node["array"] = snapshot(arr[left:right + 1])
        return record({
            "type": "place",
            "id": chosen["id"],
            "nodeId": node["id"],
            "fromNodeId": from_node_id,
            "targetIndex": pos - left,
        })

    while i < len(L) and j < len(R):
        yield record({"type": "compare", "indices": [L[i]["id"], R[j]["id"]], "nodeId": node["id"]})

        # ties go to the left run
        if L[i]["value"] <= R[j]["value"]:
            yield place(L[i], left_child_id, k)
            i += 1
        else:
            yield place(R[j], right_child_id, k)
            j += 1
        k += 1

    while i < len(L):
        yield place(L[i], left_child_id, k)
        i += 1
        k += 1

    while j < len(R):
        yield place(R[j], right_child_id, k)
        j += 1
        k += 1


def generate_merge_sort_steps(initial_array: list):
    return list(iter_merge_sort_steps(initial_array))


# --- Usage example ---
if __name__ == '__main__':
    my_array = [38, 27, 43, 3, 9, 82, 10]
    output_dir = Path("trace_output/sort")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "merge_sort_steps.json"

    print(f"Generating merge sort steps for {my_array}...")
    steps = generate_merge_sort_steps(my_array)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(steps, f, indent=2, ensure_ascii=False)

    print(f"{len(steps)} steps saved to: {output_path}")
