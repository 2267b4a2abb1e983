# validate.py
import json
import logging
from functools import lru_cache
from pathlib import Path

import jsonschema

from algostep.config import SCHEMA_PATH

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_schema(schema_path=SCHEMA_PATH):
    return json.loads(Path(schema_path).read_text(encoding='utf-8'))


def iter_trace_errors(trace, schema_path=SCHEMA_PATH):
    """Yield every jsonschema.ValidationError found in a trace document."""
    validator = jsonschema.Draft7Validator(load_schema(schema_path))
    yield from sorted(validator.iter_errors(trace), key=lambda e: list(e.path))


def validate_trace(trace, schema_path=SCHEMA_PATH):
    """Raise jsonschema.ValidationError if the trace does not conform to the schema."""
    jsonschema.validate(instance=trace, schema=load_schema(schema_path), cls=jsonschema.Draft7Validator)


def check_trace_contract(trace):
    """
    Checks the schema cannot express: the trace starts with a non-terminal step
    (BST traces excepted) and exactly one step, the last, has done = True.
    Returns a list of problems; empty means the contract holds.
    """
    problems = []
    steps = trace.get("steps", [])
    if trace.get("algorithm", {}).get("family") == "Tree":
        return problems
    if not steps:
        return ["trace has no steps"]
    if steps[0].get("done"):
        problems.append("first step is already terminal")
    done_positions = [i for i, step in enumerate(steps) if step.get("done")]
    if done_positions != [len(steps) - 1]:
        problems.append(f"expected exactly one terminal step at {len(steps) - 1}, found done at {done_positions}")
    return problems


def validate_trace_file(json_path, schema_path=SCHEMA_PATH):
    """Validate one trace file. Returns True when it conforms."""
    json_path = Path(json_path)
    logger.info("--- Validating: %s ---", json_path.name)
    try:
        data = json.loads(json_path.read_text(encoding='utf-8'))
        validate_trace(data, schema_path)
    except jsonschema.exceptions.ValidationError as e:
        logger.error("[Failed] %s: %s (path: %s)", json_path.name, e.message, list(e.path))
        return False
    except FileNotFoundError:
        logger.error("[Failed] File not found: %s", json_path)
        return False
    except json.JSONDecodeError:
        logger.error("[Failed] File content is not valid JSON: %s", json_path)
        return False

    problems = check_trace_contract(data)
    for problem in problems:
        logger.error("[Failed] %s: %s", json_path.name, problem)
    if problems:
        return False

    logger.info("[Success] %s conforms to the trace schema.", json_path.name)
    return True
