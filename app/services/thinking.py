"""
Separation of model reasoning from the user-facing answer.
"""
import re
from typing import Tuple

from app.core.constants import CompletionConfig

THINKING_PATTERN = re.compile(
    re.escape(CompletionConfig.THINK_START) + r"(.*?)" + re.escape(CompletionConfig.THINK_END),
    re.DOTALL,
)
BLANK_LINES_PATTERN = re.compile(r"\n\s*\n")


def split_thinking(response: str) -> Tuple[str, str]:
    """
    Split a completion into its reasoning blocks and its summary.

    Args:
        response: Raw completion text, possibly containing <think>...</think> blocks.

    Returns:
        (thinking, summary): the trimmed block contents joined by a blank line,
        and the remaining text with blocks removed and blank-line runs collapsed.
    """
    thinking = "\n\n".join(block.strip() for block in THINKING_PATTERN.findall(response))

    summary = THINKING_PATTERN.sub("", response).strip()
    summary = BLANK_LINES_PATTERN.sub("\n\n", summary)

    return thinking, summary
