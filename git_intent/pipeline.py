"""Blame-to-prompt pipeline: file path + line number in, PromptRecord or Unavailable out."""
import logging
import os

from git_intent import miner
from git_intent.models import (
    COMMIT_MESSAGE_PLACEHOLDER,
    DIFF_CONTEXT_PLACEHOLDER,
    PromptRecord,
    Unavailable,
)
from git_intent.prompt import render_commit_prompt

logger = logging.getLogger(__name__)


def validate_line_number(value):
    """Return value as a positive int or raise ValueError."""
    if isinstance(value, bool):
        raise ValueError("line number must be a positive integer")
    if isinstance(value, int):
        line_no = value
    else:
        text = str(value).strip()
        if not text.isdecimal():
            raise ValueError("line number must be a positive integer")
        line_no = int(text)
    if line_no < 1:
        raise ValueError("line number must be a positive integer")
    return line_no


def run(file_path, line_number):
    """Resolve blame, commit subject and diff for one line.

    Returns a PromptRecord, or Unavailable describing the first stage that
    produced no data. Commit subject and diff degrade to placeholders
    independently and never make the result Unavailable.
    """
    try:
        line_no = validate_line_number(line_number)
    except ValueError as exc:
        return Unavailable("invalid-line", str(exc))

    abs_path = os.path.realpath(os.path.abspath(file_path))
    logger.debug("explaining %s at line %d", abs_path, line_no)

    repo_path = miner.locate_repository(abs_path)
    if repo_path is None:
        return Unavailable("no-repository", f"no git repository found for file: {abs_path}")

    repo_root = miner.repository_toplevel(repo_path) or repo_path
    rel_path = miner.relative_to_root(abs_path, repo_root)
    if rel_path is None:
        return Unavailable(
            "outside-repository",
            f"file {abs_path} is not within the git repository {repo_root}",
        )

    blame = miner.get_blame_for_line(repo_root, rel_path, line_no)
    if blame is None:
        return Unavailable(
            "no-blame",
            f"no blame information for {rel_path} at line {line_no} "
            "(is the file tracked and does the line exist?)",
        )

    message = miner.get_commit_message(repo_root, blame.commit_hash)
    if not message.ok:
        logger.warning("commit message unavailable for %s: %s", blame.commit_hash, message.error)
    diff = miner.get_diff_context(repo_root, blame.commit_hash, rel_path)
    if not diff.ok:
        logger.warning("diff context unavailable for %s: %s", blame.commit_hash, diff.error)

    return PromptRecord(
        file_path=abs_path,
        line_number=line_no,
        blame=blame,
        commit_message=message.or_placeholder(COMMIT_MESSAGE_PLACEHOLDER),
        diff_context=diff.or_placeholder(DIFF_CONTEXT_PLACEHOLDER),
    )


def run_commit(revision, start_path="."):
    """Commit-explanation prompt for `revision` in the repository around start_path.

    Returns the prompt text, or Unavailable when there is no repository or
    git cannot show the revision.
    """
    abs_path = os.path.realpath(os.path.abspath(start_path))
    if os.path.isdir(abs_path):
        # start the upward walk at the directory itself
        abs_path = os.path.join(abs_path, miner.GIT_DIR_NAME)

    repo_root = miner.locate_repository(abs_path)
    if repo_root is None:
        return Unavailable("no-repository", f"no git repository found for path: {start_path}")

    shown = miner.get_commit_text(repo_root, revision)
    if not shown.ok or not shown.text.strip():
        return Unavailable("no-commit", f"could not read commit {revision} in {repo_root}")
    return render_commit_prompt(shown.text)
