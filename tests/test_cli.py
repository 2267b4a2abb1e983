"""Tests for the algostep command line."""

import json

import pytest

from algostep.cli import describe_step, main
from algostep.dispatcher import array_steps, build_trace_document


def read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_generate_from_values(tmp_path):
    output = tmp_path / "quick.json"
    assert main(["generate", "-a", "quick", "-o", str(output), "3", "1", "2"]) == 0
    trace = read(output)
    assert trace["algorithm"]["id"] == "quick_sort"
    assert [x["value"] for x in trace["steps"][-1]["array"]] == [1, 2, 3]


def test_generate_from_intent(tmp_path):
    intent = tmp_path / "intent.json"
    intent.write_text(json.dumps({"algorithm_id": "merge_sort", "data_input": [2, 1]}), encoding="utf-8")
    output = tmp_path / "merge.json"
    assert main(["generate", "--intent", str(intent), "-o", str(output)]) == 0
    assert read(output)["steps"][-1]["done"]


def test_generate_unknown_algorithm_fails(tmp_path):
    assert main(["generate", "-a", "bogo", "-o", str(tmp_path / "x.json"), "1"]) == 1


def test_bst_and_validate(tmp_path):
    output = tmp_path / "traces" / "bst.json"
    assert main(["bst", "insert:7", "insert:3", "search:3", "-o", str(output)]) == 0
    assert main(["validate", str(output)]) == 0
    assert main(["validate", str(tmp_path / "traces")]) == 0


def test_validate_reports_failures(tmp_path):
    broken = build_trace_document("bubble", [1, 2])
    broken["steps"] = []
    path = tmp_path / "broken.json"
    path.write_text(json.dumps(broken), encoding="utf-8")
    assert main(["validate", str(path)]) == 1


def test_replay(tmp_path, capsys):
    output = tmp_path / "bubble.json"
    main(["generate", "-a", "bubble", "-o", str(output), "2", "1"])
    assert main(["replay", str(output), "--speed", "0"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == len(read(output)["steps"])
    assert lines[-1].endswith("(done)")


@pytest.mark.parametrize("algorithm", ["insertion", "merge"])
def test_describe_step_handles_gaps(algorithm):
    for step in array_steps(algorithm, [3, 1, 2]):
        assert isinstance(describe_step(step), str)
