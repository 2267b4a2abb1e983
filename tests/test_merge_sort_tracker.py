"""Tests for the merge sort tracker and its persistent recursion tree."""

from algostep.sort.merge_sort_tracker import build_recursion_tree, generate_merge_sort_steps


def walk(node):
    if node is None:
        return
    yield node
    yield from walk(node["left"])
    yield from walk(node["right"])


def node_ids(tree):
    return [node["id"] for node in walk(tree)]


def find(tree, node_id):
    return next(node for node in walk(tree) if node["id"] == node_id)


def test_recursion_tree_shape():
    arr = [{"id": i, "value": v} for i, v in enumerate([5, 4, 3, 2, 1])]
    tree = build_recursion_tree(arr, 0, 4)
    assert node_ids(tree) == ["0-4", "0-2", "0-1", "0-0", "1-1", "2-2", "3-4", "3-3", "4-4"]
    assert find(tree, "3-4")["array"] == [{"id": 3, "value": 2}, {"id": 4, "value": 1}]
    assert find(tree, "2-2")["left"] is None


def test_two_element_trace():
    steps = generate_merge_sort_steps([2, 1])
    assert [s["action"]["type"] for s in steps] == [
        "start", "split", "leaf", "leaf", "compare", "place", "place", "merged", "done",
    ]

    split = steps[1]["action"]
    assert split == {"type": "split", "nodeId": "0-1", "left": 0, "mid": 0, "right": 1}

    compare = steps[4]
    assert compare["action"] == {"type": "compare", "indices": [0, 1], "nodeId": "0-1"}

    first_place, second_place = steps[5]["action"], steps[6]["action"]
    assert first_place == {"type": "place", "id": 1, "nodeId": "0-1", "fromNodeId": "1-1", "targetIndex": 0}
    assert second_place == {"type": "place", "id": 0, "nodeId": "0-1", "fromNodeId": "0-0", "targetIndex": 1}

    merged = steps[7]
    assert merged["tree"]["merged"] is True
    assert merged["tree"]["array"] == [{"id": 1, "value": 1}, {"id": 0, "value": 2}]
    assert steps[-1]["done"] is True


def test_parent_slice_refills_without_duplicate_ids():
    steps = generate_merge_sort_steps([2, 1])
    assert steps[4]["array"] == [None, None]
    assert steps[5]["array"] == [{"id": 1, "value": 1}, None]
    assert steps[5]["tree"]["array"] == [{"id": 1, "value": 1}, None]
    for step in steps:
        present = [item["id"] for item in step["array"] if item is not None]
        assert len(present) == len(set(present))


def test_traversal_order():
    steps = generate_merge_sort_steps([4, 3, 2, 1])
    structural = [
        (s["action"]["type"], s["action"]["nodeId"])
        for s in steps
        if s["action"]["type"] in ("split", "leaf", "merged")
    ]
    assert structural == [
        ("split", "0-3"), ("split", "0-1"), ("leaf", "0-0"), ("leaf", "1-1"), ("merged", "0-1"),
        ("split", "2-3"), ("leaf", "2-2"), ("leaf", "3-3"), ("merged", "2-3"),
        ("merged", "0-3"),
    ]


def test_tree_is_built_once_and_present_in_every_step():
    steps = generate_merge_sort_steps([9, 8, 7, 6, 5])
    expected = node_ids(steps[0]["tree"])
    assert len(expected) == 9
    for step in steps:
        assert node_ids(step["tree"]) == expected


def test_merged_flag_never_flips_back():
    steps = generate_merge_sort_steps([3, 1, 2, 5, 4, 0])
    merged_so_far = set()
    for step in steps:
        now = {node["id"] for node in walk(step["tree"]) if node["merged"]}
        assert merged_so_far <= now
        merged_so_far = now
    assert find(steps[-1]["tree"], "0-5")["merged"]


def test_ties_prefer_left_run():
    steps = generate_merge_sort_steps([1, 1])
    places = [s["action"] for s in steps if s["action"]["type"] == "place"]
    assert [p["id"] for p in places] == [0, 1]
    assert places[0]["fromNodeId"] == "0-0"


def test_one_compare_per_head_to_head():
    steps = generate_merge_sort_steps([4, 3, 2, 1])
    top_compares = [
        s for s in steps
        if s["action"]["type"] == "compare" and s["action"]["nodeId"] == "0-3"
    ]
    # [3, 4] vs [1, 2]: the right run empties after two comparisons
    assert len(top_compares) == 2


def test_earlier_snapshots_are_untouched():
    steps = generate_merge_sort_steps([3, 2, 1])
    assert steps[0]["tree"]["array"] == [
        {"id": 0, "value": 3}, {"id": 1, "value": 2}, {"id": 2, "value": 1},
    ]
    assert steps[0]["tree"]["merged"] is False


def test_empty_input():
    steps = generate_merge_sort_steps([])
    assert len(steps) == 2
    assert steps[0]["tree"] is None and steps[0]["action"] == {"type": "start"}
    assert steps[1]["tree"] is None and steps[1]["done"]
