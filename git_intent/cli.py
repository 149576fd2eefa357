"""git-intent CLI entrypoint."""

import argparse
import json
import logging
import sys

from git_intent import pipeline
from git_intent.llm import DEFAULT_MAX_TOKENS, llm_disabled, stream_explanation
from git_intent.models import Unavailable
from git_intent.prompt import FRAME_FOOTER, FRAME_HEADER, record_to_dict, render_framed, render_prompt
from git_intent.utils import print_error, print_stream

USAGE_HINT = "usage: git-intent FILE LINE  |  git-intent --commit REV [PATH]"


class _ArgumentParser(argparse.ArgumentParser):
    """Reports argument errors as one `Error:` line instead of usage + message."""

    def error(self, message):
        print_error(f"{message} ({USAGE_HINT})")
        sys.exit(2)


def build_parser():
    parser = _ArgumentParser(
        prog="git-intent",
        description="Explain why a line of code exists using its git blame history",
    )
    parser.add_argument("file", nargs="?", help="Path to a file inside a git repository")
    parser.add_argument("line", nargs="?", help="1-based line number")
    parser.add_argument("--commit", metavar="REV", default=None, help="Explain a whole commit instead of a line")
    parser.add_argument("--json", action="store_true", help="Print the collected record as JSON")
    parser.add_argument("--explain", action="store_true", help="Send the prompt to the local model")
    parser.add_argument("--model", default=None, help="mlx-lm model name (default: $GIT_INTENT_MODEL)")
    parser.add_argument("--max-tokens", type=int, default=DEFAULT_MAX_TOKENS, help="Model answer length")
    parser.add_argument("--verbose", action="store_true", help="Log discovery steps to stderr")
    return parser


def _explain(prompt_text, args):
    if not args.explain:
        return 0
    if llm_disabled():
        print("[explain] skipped: GIT_INTENT_SKIP_LLM=1", file=sys.stderr)
        return 0

    print("=== Explanation ===")
    try:
        chunks = stream_explanation(prompt_text, model_name=args.model, max_tokens=args.max_tokens)
        print_stream(chunks)
    except RuntimeError as exc:
        print_error(exc)
        return 1
    except Exception as exc:
        msg = str(exc)
        if "No such file or directory" in msg or "not found" in msg.lower():
            print_error(f"model may be missing/not downloaded. Details: {exc}")
        else:
            print_error(f"failed to run local model. Details: {exc}")
        return 1
    return 0


def _run_commit(args):
    if args.line is not None:
        print_error(f"--commit takes at most one PATH ({USAGE_HINT})")
        return 2
    prompt_text = pipeline.run_commit(args.commit, args.file or ".")
    if isinstance(prompt_text, Unavailable):
        print_error(prompt_text.message)
        return 1
    print(f"{FRAME_HEADER}\n\n{prompt_text}\n\n{FRAME_FOOTER}")
    return _explain(prompt_text, args)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.commit is not None:
        return _run_commit(args)
    if args.file is None or args.line is None:
        print_error(f"expected FILE and LINE ({USAGE_HINT})")
        return 2

    try:
        line_no = pipeline.validate_line_number(args.line)
    except ValueError as exc:
        print_error(str(exc))
        return 1

    result = pipeline.run(args.file, line_no)
    if isinstance(result, Unavailable):
        print_error(result.message)
        return 1

    if args.json:
        print(json.dumps(record_to_dict(result), ensure_ascii=False, indent=2))
    else:
        print(render_framed(result))
    return _explain(render_prompt(result), args)


if __name__ == "__main__":
    sys.exit(main())
