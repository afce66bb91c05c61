"""
Adapters – concrete implementations of ports.
Swap any of them (e.g. an object-storage artifact store or another publisher)
by passing an override to default_adapters().
"""

from reddit_shorts.adapters.card import SeleniumCardRenderer
from reddit_shorts.adapters.reddit import RedditPostSource
from reddit_shorts.adapters.rewriter import LLMTextRewriter
from reddit_shorts.adapters.splitter import FFmpegClipSplitter
from reddit_shorts.adapters.storage import FileSystemArtifactStore, JsonTitleCache
from reddit_shorts.adapters.tts import StreamingNarrator
from reddit_shorts.adapters.upload import YouTubeUploader
from reddit_shorts.adapters.video import MoviePyCompositor


def default_adapters(**overrides):
    """
    Build default adapter instances (use reddit_shorts.config).
    Overrides: post_source=..., narrator=..., store=..., etc. for testing or other backends.
    """
    from reddit_shorts import config

    if "store" not in overrides:
        overrides["store"] = FileSystemArtifactStore(overrides.pop("artifact_root", config.ARTIFACT_ROOT))
    else:
        overrides.pop("artifact_root", None)

    factories = {
        "post_source": RedditPostSource,
        "rewriter": LLMTextRewriter,
        "narrator": StreamingNarrator,
        "card_renderer": SeleniumCardRenderer,
        "compositor": MoviePyCompositor,
        "splitter": FFmpegClipSplitter,
        "uploader": YouTubeUploader,
        "title_cache": lambda: JsonTitleCache(config.TITLE_CACHE_FILE),
    }
    adapters = {name: overrides[name] if name in overrides else factory() for name, factory in factories.items()}
    adapters.update(overrides)
    return adapters
