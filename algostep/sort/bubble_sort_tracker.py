import json
from pathlib import Path

from algostep.elements import normalize_elements
from algostep.snapshot import snapshot


def iter_bubble_sort_steps(initial_array: list):
    """
    Yield the bubble sort trace one step at a time.
    Full n-pass structure with no early exit; equal neighbours are never swapped.
    """

    # =================================================================
    # 1. Normalize input and emit the initial snapshot
    # =================================================================

    arr = normalize_elements(initial_array)
    n = len(arr)

    yield {"array": snapshot(arr), "comparing": [], "swapped": [], "done": False}

    # =================================================================
    # 2. Track algorithm execution
    # =================================================================

    for i in range(n):
        for j in range(0, n - i - 1):
            # >> Step: highlight comparison of j and j+1 <<
            yield {
                "array": snapshot(arr),
                "comparing": [arr[j]["id"], arr[j + 1]["id"]],
                "swapped": [],
                "done": False,
            }

            if arr[j]["value"] > arr[j + 1]["value"]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]

                # >> Step: the pair after the swap <<
                yield {
                    "array": snapshot(arr),
                    "comparing": [],
                    "swapped": [arr[j]["id"], arr[j + 1]["id"]],
                    "done": False,
                }

    # >> Step: sorting finished <<
    yield {"array": snapshot(arr), "comparing": [], "swapped": [], "done": True}


def generate_bubble_sort_steps(initial_array: list):
    return list(iter_bubble_sort_steps(initial_array))


# --- Usage example ---
if __name__ == '__main__':
    my_array = [5, 1, 4, 2, 8]
    output_dir = Path("trace_output/sort")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "bubble_sort_steps.json"

    print(f"Generating bubble sort steps for {my_array}...")
    steps = generate_bubble_sort_steps(my_array)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(steps, f, indent=2, ensure_ascii=False)

    print(f"{len(steps)} steps saved to: {output_path}")
