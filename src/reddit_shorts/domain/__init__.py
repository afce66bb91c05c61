"""Domain models and pure policies."""

from reddit_shorts.domain.models import (
    ArtifactKey,
    ArtifactKind,
    Clip,
    PublishedClip,
    Segment,
    SegmentAssets,
    SourcePost,
)

__all__ = [
    "ArtifactKey",
    "ArtifactKind",
    "Clip",
    "PublishedClip",
    "Segment",
    "SegmentAssets",
    "SourcePost",
]
