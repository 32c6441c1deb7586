"""Cleanup of user writing samples before they are used as style references."""
import re
from typing import Iterable

# Essay front matter (title page, author, course details) precedes these openers.
_BODY_START = re.compile(r"^.*?(Introduction:|Abstract:|The Crucial Significance|Firstly,)", re.DOTALL)
_META_LINE = re.compile(r"^.*?(Word Count:|Date:|Course:|Dr\.|Professor).*?\n")
_AUTHOR_LINE = re.compile(r"^.*?(Dr\.|Professor|SN\d+|Word Count:).*?\n")


def clean_writing_sample(text: str) -> str:
    """
    Strip header material from a writing sample.

    Args:
        text: Extracted text of one sample

    Returns:
        The sample body with leading front matter removed
    """
    text = _BODY_START.sub(r"\1", text, count=1)
    text = _META_LINE.sub("", text, count=1)
    text = _AUTHOR_LINE.sub("", text, count=1)
    text = _BODY_START.sub(r"\1", text, count=1)
    return text.strip()


def combine_writing_samples(samples: Iterable[str]) -> str:
    """Clean every sample and join the non-empty ones with blank lines."""
    cleaned = (clean_writing_sample(sample) for sample in samples)
    return "\n\n".join(sample for sample in cleaned if sample)
