"""Post admission policy and publish titles."""

from typing import Optional

from reddit_shorts.domain.models import SourcePost
from reddit_shorts.domain.segmentation import word_count


def admission_rejection(
    post: SourcePost,
    max_words: int = 600,
    excluded_keyword: str = "update",
) -> Optional[str]:
    """Return why a post is skipped, or None when it may be processed."""
    title = post.get("title") or ""
    body = post.get("selftext") or ""
    keyword = excluded_keyword.lower()
    if keyword and (keyword in title.lower() or keyword in body.lower()):
        return f'contains "{excluded_keyword}"'
    words = word_count(body)
    if words > max_words:
        return f"word count {words} exceeds {max_words}"
    return None


def is_admissible(post: SourcePost, max_words: int = 600, excluded_keyword: str = "update") -> bool:
    return admission_rejection(post, max_words, excluded_keyword) is None


def part_label(
    segment_index: int,
    segment_count: int,
    chunk_index: int = 1,
    chunk_count: int = 1,
) -> Optional[str]:
    """
    Human part number for a clip, None for a post published as a single clip.
    Chunks of a split segment are numbered "<segment>.<chunk>".
    """
    if chunk_count > 1:
        if segment_count > 1:
            return f"{segment_index}.{chunk_index}"
        return str(chunk_index)
    if segment_count > 1:
        return str(segment_index)
    return None


def build_publish_title(short_title: str, label: Optional[str], hashtags: str = "") -> str:
    title = short_title
    if label:
        title += f" - Part {label}"
    if hashtags:
        title += f" {hashtags}"
    return title
