# algostep
#
# Step-trace engine: replays sorting algorithms and BST operations as
# ordered, self-contained snapshots that a renderer can animate.

from algostep.elements import normalize_elements, coerce_value
from algostep.errors import AlgostepError, UnknownAlgorithmError, InvalidOperationError
from algostep.dispatcher import (
    ALGORITHM_DISPATCH_TABLE,
    array_steps,
    iter_array_steps,
    build_trace_document,
    run_bst_operations,
    dispatch_and_generate,
)
from algostep.tree.bst_tracker import (
    BSTNode,
    BSTSession,
    NodeIdAllocator,
    bst_insert_steps,
    bst_delete_steps,
    bst_search_steps,
    reset_node_id_counter,
)
from algostep.playback import PlaybackCursor

__version__ = "1.0.0"
