"""Ports (interfaces) – depend on these, implement in adapters."""

from reddit_shorts.ports.interfaces import (
    IArtifactStore,
    ICardRenderer,
    IClipSplitter,
    INarrator,
    IPostSource,
    ITextRewriter,
    ITitleCache,
    IUploader,
    IVideoCompositor,
)

__all__ = [
    "IArtifactStore",
    "ICardRenderer",
    "IClipSplitter",
    "INarrator",
    "IPostSource",
    "ITextRewriter",
    "ITitleCache",
    "IUploader",
    "IVideoCompositor",
]
