"""Splitting corrected post text into narration segments."""

from typing import List

SENTENCE_ENDINGS = (".", "!", "?")


def word_count(text: str) -> int:
    return len(text.split())


def split_text_into_segments(text: str, min_words: int = 75) -> List[str]:
    """
    Split text into segments of at least `min_words` words.

    A segment closes only at a word ending a sentence once the minimum is
    reached. A shorter remainder is appended to the last segment instead of
    becoming a segment of its own; text that never reaches the minimum comes
    back as a single segment.
    """
    segments: List[str] = []
    current: List[str] = []

    for word in text.split():
        current.append(word)
        if len(current) >= min_words and word.endswith(SENTENCE_ENDINGS):
            segments.append(" ".join(current))
            current = []

    if current:
        if segments and len(current) < min_words:
            segments[-1] += " " + " ".join(current)
        else:
            segments.append(" ".join(current))
    return segments


def plan_segments(text: str, long_post_words: int = 400, min_words: int = 150) -> List[str]:
    """Segment only posts longer than `long_post_words`; shorter ones stay whole."""
    if word_count(text) > long_post_words:
        return split_text_into_segments(text, min_words)
    return [text] if text.strip() else []
