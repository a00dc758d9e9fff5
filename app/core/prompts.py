"""
Centralized configuration for LLM Prompts.

Summarization style and depth are policy constants; nothing here is derived
from the transcript itself.
"""


class SummarizationPrompts:
    """System prompts for the Video Summarization Service."""

    SINGLE_VIDEO = (
        "Summarize the provided YouTube video, providing all the key points of the video "
        "and any related insights. Don't be afraid to go in-depth with the details."
    )
