import json
from pathlib import Path

from algostep.elements import normalize_elements
from algostep.snapshot import snapshot


def iter_quicksort_steps(initial_array: list):
    """
    Yield the quicksort trace (Lomuto partition, last element of each range as pivot).

    Sub-ranges are processed depth-first, left before right, from an explicit stack
    rather than the call stack, so already-sorted input cannot exhaust recursion depth.
    """
    arr = normalize_elements(initial_array)
    n = len(arr)

    def record(comparing=(), swapped=(), pivot=None, done=False):
        return {
            "array": snapshot(arr),
            "comparing": list(comparing),
            "swapped": list(swapped),
            "pivot": pivot,
            "done": done,
        }

    yield record()

    # (low, high) ranges still to partition
    call_stack = [(0, n - 1)]

    while call_stack:
        low, high = call_stack.pop()
        if low >= high:
            continue

        # --- partition(low, high) ---
        pivot = arr[high]
        i = low

        for j in range(low, high):
            # >> Step: compare arr[j] against the pivot <<
            yield record(comparing=[arr[j]["id"]], pivot=pivot["id"])

            if arr[j]["value"] < pivot["value"]:
                arr[i], arr[j] = arr[j], arr[i]
                yield record(swapped=[arr[i]["id"], arr[j]["id"]], pivot=pivot["id"])
                i += 1

        # >> Step: move the pivot to its final slot <<
        arr[i], arr[high] = arr[high], arr[i]
        yield record(swapped=[arr[i]["id"], arr[high]["id"]], pivot=pivot["id"])

        # right is pushed first so the left range is popped first
        call_stack.append((i + 1, high))
        call_stack.append((low, i - 1))

    yield record(done=True)


def generate_quicksort_steps(initial_array: list):
    return list(iter_quicksort_steps(initial_array))


# --- Usage example ---
if __name__ == '__main__':
    my_array = [10, 7, 8, 9, 1, 5]
    output_dir = Path("trace_output/sort")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "quicksort_steps.json"

    print(f"Generating quicksort steps for {my_array}...")
    steps = generate_quicksort_steps(my_array)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(steps, f, indent=2, ensure_ascii=False)

    print(f"{len(steps)} steps saved to: {output_path}")
