# cli.py
import argparse
import json
import logging
import sys
import time
from pathlib import Path

from tqdm import tqdm

from algostep.config import DEFAULT_OUTPUT_DIR, DEFAULT_SPEED_MS, load_intent
from algostep.dispatcher import ALGORITHM_DISPATCH_TABLE, build_trace_document, dispatch_and_generate, run_bst_operations
from algostep.elements import format_value
from algostep.errors import AlgostepError
from algostep.playback import PlaybackCursor
from algostep.validate import validate_trace_file

logger = logging.getLogger("algostep")


def setup_logging(log_file=None, verbose=False):
    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
        handlers=handlers,
    )


def write_trace(trace, output):
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, 'w', encoding='utf-8') as f:
        json.dump(trace, f, indent=2, ensure_ascii=False)
    logger.info("%d steps saved to: %s", len(trace["steps"]), output)
    return output


# =================================================================
# Sub-commands
# =================================================================

def cmd_generate(args):
    if args.intent:
        trace = dispatch_and_generate(load_intent(args.intent))
        if trace is None:
            return 1
    else:
        if not args.algorithm:
            logger.error("Either --intent or --algorithm is required.")
            return 1
        trace = build_trace_document(args.algorithm, args.values)

    output = args.output or DEFAULT_OUTPUT_DIR / f"{trace['algorithm']['id']}_trace.json"
    write_trace(trace, output)
    return 0


def cmd_bst(args):
    trace, session = run_bst_operations(args.operations)
    logger.info("Final tree (in-order): %s", session.inorder())
    write_trace(trace, args.output or DEFAULT_OUTPUT_DIR / "bst_trace.json")
    return 0


def cmd_validate(args):
    path = Path(args.path)
    files = sorted(path.rglob("*.json")) if path.is_dir() else [path]
    if not files:
        logger.warning("No .json files found in '%s'.", path)
        return 1

    success_count = 0
    for json_file in tqdm(files, desc="Validating traces", disable=len(files) < 2):
        if validate_trace_file(json_file):
            success_count += 1

    logger.info("Total: %d files, Success: %d, Failed: %d.", len(files), success_count, len(files) - success_count)
    return 0 if success_count == len(files) else 1


def describe_step(step):
    """One terminal line for a step of any trace family."""
    if "message" in step:
        return f"[{step['action']}] {step['message']}"
    if "action" in step:
        action = step["action"]
        details = ", ".join(f"{k}={v}" for k, v in action.items() if k != "type")
        values = " ".join(format_value(x["value"]) if x else "_" for x in step.get("array") or [])
        return f"[{action['type']}] {details}  | {values}"

    cells = []
    for item in step["array"]:
        if item is None:
            cells.append("_")
            continue
        marker = ""
        if item["id"] in step.get("comparing", []):
            marker = "?"
        elif item["id"] in step.get("swapped", []) or item["id"] in step.get("shifted", []):
            marker = "*"
        elif item["id"] == step.get("pivot"):
            marker = "^"
        cells.append(f"{format_value(item['value'])}{marker}")
    return " ".join(cells) + ("  (done)" if step.get("done") else "")


def cmd_replay(args):
    with open(args.trace, 'r', encoding='utf-8') as f:
        trace = json.load(f)

    cursor = PlaybackCursor(trace["steps"], speed=args.speed)
    cursor.on_finish = cursor.pause
    if not cursor.steps:
        logger.warning("Trace has no steps to replay.")
        return 0

    print(describe_step(cursor.current))
    cursor.play()
    while cursor.playing:
        time.sleep(cursor.delay)
        if cursor.tick():
            print(describe_step(cursor.current))
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="algostep", description="Generate and replay algorithm step traces")
    parser.add_argument('--log_file', default=None, help='Also write log output to this file')
    parser.add_argument('-v', '--verbose', action='store_true')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('generate', help='Trace a sorting algorithm')
    p.add_argument('--algorithm', '-a', help=f"One of {sorted(ALGORITHM_DISPATCH_TABLE)} (or bubble/insertion/heap/quick/merge)")
    p.add_argument('--intent', help='Intent JSON file with algorithm_id and data_input')
    p.add_argument('--output', '-o', default=None)
    p.add_argument('values', nargs='*', help='Input values')
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser('bst', help='Trace a script of BST operations, e.g. insert:7 search:7')
    p.add_argument('operations', nargs='+')
    p.add_argument('--output', '-o', default=None)
    p.set_defaults(func=cmd_bst)

    p = sub.add_parser('validate', help='Validate a trace file or a directory of traces')
    p.add_argument('path')
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser('replay', help='Play a trace in the terminal')
    p.add_argument('trace')
    p.add_argument('--speed', type=int, default=DEFAULT_SPEED_MS, help='Delay per step in milliseconds')
    p.set_defaults(func=cmd_replay)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    try:
        return args.func(args)
    except AlgostepError as e:
        logger.error("%s", e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
