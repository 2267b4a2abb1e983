import json
from pathlib import Path

from algostep.elements import normalize_elements
from algostep.snapshot import snapshot


def _step(arr, comparing=None, shifted=None, floating_key=None, done=False):
    return {
        "array": snapshot(arr),
        "comparing": list(comparing or []),
        "shifted": list(shifted or []),
        "floatingKey": dict(floating_key) if floating_key else None,
        "done": done,
    }


def iter_insertion_sort_steps(initial_array: list):
    """
    Yield the insertion sort trace.
    The key is lifted out of the array (its slot becomes a None gap) and the gap
    walks left while the predecessor is strictly greater, so equal values keep
    their original order.
    """
    arr = normalize_elements(initial_array)
    n = len(arr)

    yield _step(arr)

    for i in range(1, n):
        key = dict(arr[i])
        j = i - 1

        # >> Step: lift the key, leaving a gap at i <<
        arr[i] = None
        yield _step(arr, floating_key={"id": key["id"], "value": key["value"], "targetIndex": i})

        while j >= 0 and arr[j] is not None and arr[j]["value"] > key["value"]:
            # >> Step: shift j into the gap, the gap moves to j <<
            arr[j + 1] = arr[j]
            arr[j] = None
            yield _step(
                arr,
                comparing=[arr[j + 1]["id"], key["id"]],
                shifted=[arr[j + 1]["id"]],
                floating_key={"id": key["id"], "value": key["value"], "targetIndex": j},
            )
            j -= 1

        # >> Step: drop the key into the gap <<
        arr[j + 1] = key
        yield _step(arr, shifted=[key["id"]])

    yield _step(arr, done=True)


def generate_insertion_sort_steps(initial_array: list):
    return list(iter_insertion_sort_steps(initial_array))


# --- Usage example ---
if __name__ == '__main__':
    my_array = [12, 11, 13, 5, 6]
    output_dir = Path("trace_output/sort")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "insertion_sort_steps.json"

    print(f"Generating insertion sort steps for {my_array}...")
    steps = generate_insertion_sort_steps(my_array)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(steps, f, indent=2, ensure_ascii=False)

    print(f"{len(steps)} steps saved to: {output_path}")
