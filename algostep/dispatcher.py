# dispatcher.py
import json
import logging
import argparse

from algostep.config import (
    TRACE_VERSION,
    DEFAULT_OUTPUT_DIR,
    ALGORITHM_INFO,
    ALGORITHM_ALIASES,
    load_intent,
)
from algostep.elements import normalize_elements, coerce_value
from algostep.errors import AlgostepError, UnknownAlgorithmError, InvalidOperationError
from algostep.sort import (
    iter_bubble_sort_steps,
    iter_insertion_sort_steps,
    iter_heap_sort_steps,
    iter_quicksort_steps,
    iter_merge_sort_steps,
)
from algostep.tree.bst_tracker import BSTSession

logger = logging.getLogger(__name__)

# --- 1. Map algorithm ID strings to tracker generators ---
ALGORITHM_DISPATCH_TABLE = {
    "bubble_sort": iter_bubble_sort_steps,
    "insertion_sort": iter_insertion_sort_steps,
    "heap_sort": iter_heap_sort_steps,
    "quick_sort": iter_quicksort_steps,
    "merge_sort": iter_merge_sort_steps,
}

BST_OPERATIONS = ("insert", "delete", "search")


def resolve_algorithm(algorithm_id):
    """Canonical algorithm id for `algorithm_id` or one of its short aliases."""
    key = str(algorithm_id).strip().lower() if algorithm_id is not None else ""
    key = ALGORITHM_ALIASES.get(key, key)
    if key not in ALGORITHM_DISPATCH_TABLE:
        raise UnknownAlgorithmError(algorithm_id)
    return key


def iter_array_steps(algorithm, values):
    """Lazy trace for one of the array algorithms."""
    return ALGORITHM_DISPATCH_TABLE[resolve_algorithm(algorithm)](values)


def array_steps(algorithm, values):
    """Eager trace for one of the array algorithms."""
    return list(iter_array_steps(algorithm, values))


def _envelope(algorithm_id, input_data, steps):
    info = ALGORITHM_INFO[algorithm_id]
    return {
        "trace_version": TRACE_VERSION,
        "algorithm": {"id": algorithm_id, "name": info["name"], "family": info["family"]},
        "input": input_data,
        "steps": steps,
    }


def build_trace_document(algorithm, values):
    algorithm_id = resolve_algorithm(algorithm)
    steps = array_steps(algorithm_id, values)
    return _envelope(algorithm_id, normalize_elements(values), steps)


# =================================================================
# BST operation scripts
# =================================================================

def parse_bst_operation(operation):
    """
    Accepts {"op": "insert", "value": 7} or the short form "insert:7".
    """
    if isinstance(operation, str):
        op, sep, value = operation.partition(":")
        if not sep:
            raise InvalidOperationError(f"Expected 'op:value', got '{operation}'.")
        operation = {"op": op, "value": value}

    if not isinstance(operation, dict):
        raise InvalidOperationError(f"Unsupported BST operation: {operation!r}")

    op = str(operation.get("op", "")).strip().lower()
    if op not in BST_OPERATIONS:
        raise InvalidOperationError(f"Unknown BST operation '{op}', expected one of {BST_OPERATIONS}.")
    if "value" not in operation:
        raise InvalidOperationError(f"BST operation '{op}' is missing a value.")
    return op, coerce_value(operation["value"])


def run_bst_operations(operations, session=None):
    """
    Replay a list of insert/delete/search operations against one tree.
    Each step is tagged with the index of the operation that produced it.
    """
    session = session or BSTSession()
    parsed = [parse_bst_operation(operation) for operation in operations]

    steps = []
    for index, (op, value) in enumerate(parsed):
        op_steps = getattr(session, op)(value)
        for step in op_steps:
            step["operation"] = index
        steps.extend(op_steps)

    document = _envelope("bst", [{"op": op, "value": value} for op, value in parsed], steps)
    return document, session


def dispatch_and_generate(intent_json: dict):
    """
    Main dispatch function. Receives an intent dict, calls the matching tracker
    and returns the trace document, or None if the intent cannot be served.
    """
    algorithm_id = intent_json.get("algorithm_id")
    data_input = intent_json.get("data_input")

    logger.info("Dispatcher: received request with algorithm ID '%s'.", algorithm_id)

    if data_input is None:
        logger.error("Missing 'data_input' in intent JSON.")
        return None

    bst_intent = str(algorithm_id).lower() == "bst"
    values = data_input.get("operations", []) if bst_intent and isinstance(data_input, dict) else data_input
    if not isinstance(values, (list, tuple)):
        logger.error("'data_input' must be a list, got %s.", type(values).__name__)
        return None

    try:
        if bst_intent:
            document, _ = run_bst_operations(values)
        else:
            document = build_trace_document(algorithm_id, values)
    except AlgostepError as e:
        logger.error("Cannot dispatch '%s': %s", algorithm_id, e)
        return None

    logger.info("Tracker generated %d steps.", len(document["steps"]))
    return document


# --- Usage example ---
if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s')

    parser = argparse.ArgumentParser(description='Dispatch based on intent JSON')
    parser.add_argument('intent_file', nargs='?', help='Path to intent JSON file')
    args = parser.parse_args()
    if args.intent_file:
        sample_intent = load_intent(args.intent_file)
    else:
        sample_intent = {"algorithm_id": "bubble_sort", "data_input": [5, 1, 4]}

    trace = dispatch_and_generate(sample_intent)

    if trace:
        DEFAULT_OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        output_path = DEFAULT_OUTPUT_DIR / f"{trace['algorithm']['id']}_trace.json"
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(trace, f, indent=2, ensure_ascii=False)
        logger.info("Dispatch successful! Trace saved to: %s", output_path)
