import json
from pathlib import Path

from algostep.elements import normalize_elements
from algostep.snapshot import snapshot


def iter_heap_sort_steps(initial_array: list):
    """
    Yield the heap sort trace.

    Phase one builds a max heap by sifting down every parent from n // 2 - 1 to the
    root. Phase two swaps the root with the last unsorted slot and sifts the new root
    down through the shrinking heap until one element remains.

    Role lists always carry element ids, never array indices.
    """

    # =================================================================
    # 1. Normalize input and emit the initial snapshot
    # =================================================================

    a = normalize_elements(initial_array)
    n = len(a)

    def record(comparing=(), swapped=(), done=False):
        return {
            "array": snapshot(a),
            "comparing": list(comparing),
            "swapped": list(swapped),
            "done": done,
        }

    yield record()

    # --- Sift-down helper ---
    def heapify(size, root):
        largest = root
        left = 2 * root + 1
        right = 2 * root + 2

        if left < size:
            yield record(comparing=[a[largest]["id"], a[left]["id"]])
            if a[left]["value"] > a[largest]["value"]:
                largest = left

        if right < size:
            yield record(comparing=[a[largest]["id"], a[right]["id"]])
            if a[right]["value"] > a[largest]["value"]:
                largest = right

        if largest != root:
            a[root], a[largest] = a[largest], a[root]
            yield record(swapped=[a[root]["id"], a[largest]["id"]])
            yield from heapify(size, largest)

    # =================================================================
    # 2. Build max heap
    # =================================================================

    for i in range(n // 2 - 1, -1, -1):
        yield from heapify(n, i)

    # =================================================================
    # 3. Heap extraction
    # =================================================================

    for i in range(n - 1, 0, -1):
        a[0], a[i] = a[i], a[0]
        yield record(swapped=[a[0]["id"], a[i]["id"]])
        yield from heapify(i, 0)

    yield record(done=True)


def generate_heap_sort_steps(initial_array: list):
    return list(iter_heap_sort_steps(initial_array))


# --- Usage example ---
if __name__ == '__main__':
    my_array = [4, 10, 3, 5, 1]
    output_dir = Path("trace_output/sort")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "heap_sort_steps.json"

    print(f"Generating heap sort steps for {my_array}...")
    steps = generate_heap_sort_steps(my_array)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(steps, f, indent=2, ensure_ascii=False)

    print(f"{len(steps)} steps saved to: {output_path}")
