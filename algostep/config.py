# config.py
#
# Shared defaults for the trackers, dispatcher and CLI.
# Everything that reads a setting should import it from here.

import json
from pathlib import Path

TRACE_VERSION = "1.0"

DEFAULT_OUTPUT_DIR = Path("trace_output")

# Playback delay per step, in milliseconds
DEFAULT_SPEED_MS = 500

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "trace_schema.json"

ALGORITHM_INFO = {
    "bubble_sort":    {"name": "Bubble Sort",    "family": "Sorting"},
    "insertion_sort": {"name": "Insertion Sort", "family": "Sorting"},
    "heap_sort":      {"name": "Heap Sort",      "family": "Sorting"},
    "quick_sort":     {"name": "Quick Sort",     "family": "Sorting"},
    "merge_sort":     {"name": "Merge Sort",     "family": "Sorting"},
    "bst":            {"name": "Binary Search Tree", "family": "Tree"},
}

# Short names used by the original controls ("quick", "merge", ...)
ALGORITHM_ALIASES = {
    "bubble": "bubble_sort",
    "insertion": "insertion_sort",
    "heap": "heap_sort",
    "quick": "quick_sort",
    "merge": "merge_sort",
}


def load_intent(path):
    """Read an intent JSON file ({"algorithm_id": ..., "data_input": ...})."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
