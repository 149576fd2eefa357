"""Value objects handed between pipeline stages."""
from dataclasses import dataclass
from typing import Optional

COMMIT_MESSAGE_PLACEHOLDER = "Could not retrieve commit message"
DIFF_CONTEXT_PLACEHOLDER = "Could not retrieve diff context"


@dataclass(frozen=True)
class BlameRecord:
    """One blamed line: who last touched it, when, and what it said."""

    commit_hash: str
    author: str
    date: str
    line_content: str


@dataclass(frozen=True)
class PromptRecord:
    """Everything the explanation prompt is rendered from."""

    file_path: str
    line_number: int
    blame: BlameRecord
    commit_message: str
    diff_context: str


@dataclass(frozen=True)
class Fetched:
    """Result of a best-effort git lookup: either text or an error description."""

    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    def or_placeholder(self, placeholder: str) -> str:
        return self.text if self.ok else placeholder


@dataclass(frozen=True)
class Unavailable:
    """Pipeline gave up; `reason` is a short code, `message` is user-facing."""

    reason: str
    message: str
