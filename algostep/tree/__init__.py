from algostep.tree.bst_tracker import (
    BSTNode,
    BSTSession,
    NodeIdAllocator,
    bst_insert_steps,
    bst_delete_steps,
    bst_search_steps,
    reset_node_id_counter,
    inorder_values,
    is_bst,
)
