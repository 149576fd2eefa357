"""Repository discovery, blame parsing and commit lookups via GitPython."""
import logging
import os
import re

from git import Repo
from git.exc import GitError, InvalidGitRepositoryError, NoSuchPathError

from git_intent.models import BlameRecord, Fetched

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"
DIFF_CONTEXT_LINES = 3

# <hash> [<filename>] (<author> <YYYY-MM-DD> <HH:MM:SS> <+zzzz> <lineno>) <content>
_STRICT_BLAME_RE = re.compile(
    r"^\^?([0-9a-f]+)\s+(?:[^\s(]\S*\s+)?\((.+?)\s+(\d{4}-\d{2}-\d{2})\s+\d{2}:\d{2}:\d{2}\s+[+-]\d{4}\s+\d+\)\s*(.*)$"
)
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _open_repo(path):
    try:
        return Repo(path)
    except (NoSuchPathError, InvalidGitRepositoryError):
        return None


def _printable(output):
    # GitPython decodes with surrogateescape; non-UTF-8 bytes become U+FFFD
    return output.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _run_git(repo_root, command, *args):
    """Run `git <command> <args>` in repo_root; failures come back as Fetched.error."""
    repo = _open_repo(repo_root)
    if repo is None:
        return Fetched(error=f"not a git repository: {repo_root}")
    try:
        output = getattr(repo.git, command)(*args)
    except (GitError, OSError) as exc:
        name = command.replace("_", "-")
        logger.debug("git %s failed in %s: %s", name, repo_root, exc)
        return Fetched(error=f"git {name} failed: {exc}")
    finally:
        repo.close()
    return Fetched(text=_printable(output))


def locate_repository(file_path):
    """Return the closest ancestor directory of file_path that is a git work tree, or None."""
    current = os.path.dirname(os.path.abspath(file_path))
    while True:
        if os.path.exists(os.path.join(current, GIT_DIR_NAME)):
            logger.debug("found %s in %s", GIT_DIR_NAME, current)
            repo = _open_repo(current)
            if repo is not None:
                repo.close()
                logger.debug("confirmed git repository at %s", current)
                return current
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    logger.debug("no git repository found above %s", file_path)
    return None


def repository_toplevel(repo_root):
    """Ask git for the work tree top level of repo_root."""
    result = _run_git(repo_root, "rev_parse", "--show-toplevel")
    if not result.ok or not result.text.strip():
        return None
    return os.path.normpath(result.text.strip())


def relative_to_root(abs_path, repo_root):
    """Path of abs_path relative to repo_root, or None unless it lies strictly inside it."""
    root = os.path.realpath(repo_root)
    target = os.path.realpath(abs_path)
    try:
        common = os.path.commonpath([root, target])
    except ValueError:
        # different drives
        return None
    if common != root or target == root:
        return None
    return os.path.relpath(target, root).replace(os.sep, "/")


def is_tracked(repo_root, rel_path):
    return _run_git(repo_root, "ls_files", "--error-unmatch", "--", rel_path).ok


def parse_blame_strict(output):
    """Parse canonical `git blame --date=iso` output; None when it does not match."""
    m = _STRICT_BLAME_RE.match(output)
    if m is None:
        return None
    return BlameRecord(
        commit_hash=m.group(1),
        author=m.group(2).strip(),
        date=m.group(3),
        line_content=m.group(4),
    )


def parse_blame_fallback(output):
    """Best-effort positional parse for blame lines the strict pattern rejects.

    Covers renamed files (an extra filename column after the hash) and odd
    author names. The author is whatever precedes the first date inside the
    parentheses, so a name that itself contains a date will be cut short.
    """
    tokens = output.split()
    if not tokens:
        return None
    commit_hash = tokens[0].lstrip("^")

    open_idx = output.find("(")
    close_idx = output.rfind(")")
    if open_idx == -1 or close_idx == -1:
        return None

    header = output[open_idx + 1:close_idx]
    date_match = _ISO_DATE_RE.search(header)
    if date_match is None:
        return None
    author = header[:date_match.start()].strip()
    if not commit_hash or not author:
        return None

    return BlameRecord(
        commit_hash=commit_hash,
        author=author,
        date=date_match.group(0),
        line_content=output[close_idx + 1:].strip(),
    )


def parse_blame_output(output):
    """Strict parse first, positional fallback second."""
    text = (output or "").strip()
    if not text:
        return None
    record = parse_blame_strict(text)
    if record is None:
        logger.debug("strict blame pattern did not match, trying fallback: %r", text)
        record = parse_blame_fallback(text)
    return record


def get_blame_for_line(repo_root, rel_path, line_no):
    """Blame a single line of a tracked file; None when no record can be produced."""
    if line_no <= 0:
        return None
    if not is_tracked(repo_root, rel_path):
        logger.debug("%s is not tracked in %s", rel_path, repo_root)
        return None

    result = _run_git(
        repo_root,
        "blame",
        "--follow",
        "-L",
        f"{line_no},{line_no}",
        "--date=iso",
        "--",
        rel_path,
    )
    if not result.ok:
        return None
    return parse_blame_output(result.text)


def get_commit_message(repo_root, commit_hash):
    """Subject line of a commit."""
    result = _run_git(repo_root, "show", "-s", "--pretty=%s", commit_hash)
    if result.ok:
        return Fetched(text=result.text.strip())
    return result


def get_diff_context(repo_root, commit_hash, rel_path):
    """Unified diff of one file in one commit."""
    return _run_git(
        repo_root,
        "show",
        f"--unified={DIFF_CONTEXT_LINES}",
        commit_hash,
        "--",
        rel_path,
    )


def get_commit_text(repo_root, revision):
    """Full `git show` output (header, message, patch) for one revision."""
    return _run_git(repo_root, "show", "--stat", "--patch", revision, "--")
