"""Helpers shared by the CLI and the model adapter."""
import logging
import sys

logger = logging.getLogger(__name__)


def chunk_text(chunk):
    """Text carried by one streamed response chunk, or None if it has none.

    Chunks are either plain strings or objects exposing the text on a
    `value` (chat APIs) or `text` (mlx-lm GenerationResponse) attribute.
    """
    if isinstance(chunk, str):
        return chunk
    for attr in ("value", "text"):
        value = chunk.get(attr) if isinstance(chunk, dict) else getattr(chunk, attr, None)
        if value is None:
            continue
        if isinstance(value, str):
            return value
        logger.warning("chunk %s is not a string: %r", attr, value)
        return None
    logger.warning("unexpected chunk format: %r", chunk)
    return None


def print_error(message):
    print(f"Error: {message}", file=sys.stderr)


def print_stream(chunks, out=None):
    """Echo streamed text as it arrives; returns the full text."""
    out = out or sys.stdout
    parts = []
    for piece in chunks:
        parts.append(piece)
        out.write(piece)
        out.flush()
    out.write("\n")
    return "".join(parts)
