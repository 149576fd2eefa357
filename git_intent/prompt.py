"""Render explanation-request text from a PromptRecord."""
from dataclasses import asdict

from git_intent.models import PromptRecord

DIFF_RULE = "-" * 59
FRAME_HEADER = "==================== Generated Prompt ===================="
FRAME_FOOTER = "=" * 59


def render_prompt(record: PromptRecord) -> str:
    """Build the plain-text prompt for the explanation model. Pure; no I/O."""
    blame = record.blame
    return (
        "Given the following information:\n\n"
        f"- File: {record.file_path}\n"
        f"- Line number: {record.line_number}\n"
        f"- Line content: {blame.line_content}\n"
        f"- Author: {blame.author}\n"
        f"- Commit date: {blame.date}\n"
        f"- Commit message: {record.commit_message}\n\n"
        "Git diff context:\n"
        f"{DIFF_RULE}\n"
        f"{record.diff_context}\n"
        f"{DIFF_RULE}\n\n"
        f'Please explain why this line ("{blame.line_content}") was introduced or changed '
        "based on this information. Focus on the purpose and reasoning behind this change.\n"
        "Give the answer in a concise and clear manner, suitable for output in a terminal of a chat. "
        "Do not include any markdown formatting and do not repeat the line of code, "
        "nor quote the commit message if not absolutely needed.\n"
        "Also explain how the file worked before this change and how it works now."
    )


def render_framed(record: PromptRecord) -> str:
    """Prompt text wrapped in the banner printed by the standalone CLI."""
    return f"{FRAME_HEADER}\n\n{render_prompt(record)}\n\n{FRAME_FOOTER}"


def render_commit_prompt(commit_text: str) -> str:
    """Ask for an explanation of arbitrary commit text (hash, log entry, show output)."""
    return (
        "You are a helpful assistant that explains Git commits in a clear and concise manner. "
        "Please explain the following Git commit in detail, including what changed and why. "
        "Do not include any markdown formatting.\n\n"
        f"{DIFF_RULE}\n{(commit_text or '').strip()}\n{DIFF_RULE}"
    )


def record_to_dict(record: PromptRecord) -> dict:
    """Flat JSON-ready view of a record."""
    data = asdict(record)
    blame = data.pop("blame")
    data.update(
        {
            "commit_hash": blame["commit_hash"],
            "author": blame["author"],
            "date": blame["date"],
            "line_content": blame["line_content"],
        }
    )
    return data
