"""Shared fakes for the pipeline ports."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Optional

import pytest

from reddit_shorts.adapters.storage import FileSystemArtifactStore, JsonTitleCache
from reddit_shorts.application.pipeline import ShortsPipeline
from reddit_shorts.domain.models import Clip, SourcePost
from reddit_shorts.errors import CompositionError, NarrationError
from reddit_shorts.ports.interfaces import (
    ICardRenderer,
    IClipSplitter,
    INarrator,
    IPostSource,
    ITextRewriter,
    IUploader,
    IVideoCompositor,
)

HASHTAGS = "#shorts"


def sentences(word_total: int, words_per_sentence: int = 10, word: str = "word") -> str:
    """Body text made of `word_total` words with a period every `words_per_sentence` words."""
    words = []
    for i in range(1, word_total + 1):
        words.append(f"{word}." if i % words_per_sentence == 0 else word)
    return " ".join(words)


def make_post(post_id: str = "abc", title: str = "My long story", body: str = "", **extra) -> SourcePost:
    post: SourcePost = {
        "id": post_id,
        "title": title,
        "selftext": body or sentences(50),
        "author": "throwaway",
        "subreddit": "AmItheAsshole",
        "subreddit_name_prefixed": "r/AmItheAsshole",
        "ups": 1200,
        "num_comments": 300,
    }
    post.update(extra)
    return post


class FakePostSource(IPostSource):
    def __init__(self, posts: List[SourcePost]):
        self.posts = posts
        self.calls: List[tuple] = []

    def fetch_posts(self, subreddit: str, sort: str = "top.json?t=all") -> List[SourcePost]:
        self.calls.append((subreddit, sort))
        return list(self.posts)


class FakeRewriter(ITextRewriter):
    def __init__(self, short_title: str = "Short Title", description: Optional[str] = "A description"):
        self.short_title = short_title
        self.description = description
        self.calls: List[str] = []

    def correct_text(self, text: str) -> str:
        self.calls.append("correct")
        return text

    def shorten_title(self, title: str) -> str:
        self.calls.append("shorten")
        return self.short_title

    def generate_description(self, title: str, post_text: str) -> Optional[str]:
        self.calls.append("describe")
        return self.description


class FakeNarrator(INarrator):
    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.calls: List[str] = []

    def stream_speech(self, text: str) -> Iterator[bytes]:
        self.calls.append(text)
        yield b"ID3"
        if self.fail_on and self.fail_on in text:
            raise NarrationError("stream dropped")
        yield b"audio-bytes"


class FakeCardRenderer(ICardRenderer):
    def __init__(self, png: bytes = b"\x89PNG fake"):
        self.png = png
        self.markups: List[str] = []

    def render_card(self, markup: str) -> bytes:
        self.markups.append(markup)
        return self.png


class FakeCompositor(IVideoCompositor):
    def __init__(self, duration: float = 45.0, fail: bool = False):
        self.duration = duration
        self.fail = fail
        self.calls: List[tuple] = []

    def compose(self, background_path, caption_path, narration_path, output_path) -> Clip:
        self.calls.append((background_path, caption_path, narration_path, output_path))
        if self.fail:
            raise CompositionError("encoder crashed")
        Path(output_path).write_bytes(b"mp4")
        return Clip(path=output_path, duration=self.duration)


class FakeSplitter(IClipSplitter):
    def __init__(self, duration: float = 45.0, chunk_durations: Optional[List[float]] = None):
        self._duration = duration
        self.chunk_durations = chunk_durations or [150.0, 100.0]
        self.split_calls: List[tuple] = []

    def duration(self, path: str) -> float:
        return self._duration

    def split(self, clip_path, chunk_seconds, output_dir, stem, min_tail_seconds=30.0, max_clip_seconds=None) -> List[Clip]:
        self.split_calls.append((clip_path, chunk_seconds, stem, min_tail_seconds, max_clip_seconds))
        Path(output_dir).mkdir(parents=True, exist_ok=True)
        clips = []
        for i, d in enumerate(self.chunk_durations):
            path = Path(output_dir) / f"{stem}_{i}.mp4"
            path.write_bytes(b"chunk")
            clips.append(Clip(path=str(path), duration=d))
        return clips


class FakeUploader(IUploader):
    def __init__(self, fail_titles: Optional[List[str]] = None):
        self.fail_titles = fail_titles or []
        self.uploads: List[Dict] = []

    def upload_video(self, video_path, title, description="", tags=None, category_id="22", privacy_status="public"):
        self.uploads.append({"path": video_path, "title": title, "description": description})
        if any(marker in title for marker in self.fail_titles):
            raise RuntimeError("quota exceeded")
        return {"video_id": f"vid{len(self.uploads)}", "url": f"https://youtu.be/vid{len(self.uploads)}"}


@pytest.fixture
def store(tmp_path: Path) -> FileSystemArtifactStore:
    return FileSystemArtifactStore(str(tmp_path / "artifacts"))


@pytest.fixture
def title_cache(tmp_path: Path) -> JsonTitleCache:
    return JsonTitleCache(str(tmp_path / "shortTitleCache.json"))


@pytest.fixture
def build_pipeline(store, title_cache, tmp_path):
    """Factory building a pipeline from fakes; pass overrides for any port or option."""

    def factory(posts: List[SourcePost], **overrides):
        ports = {
            "post_source": FakePostSource(posts),
            "rewriter": FakeRewriter(),
            "narrator": FakeNarrator(),
            "card_renderer": FakeCardRenderer(),
            "compositor": FakeCompositor(),
            "splitter": FakeSplitter(),
            "uploader": FakeUploader(),
            "store": store,
            "title_cache": title_cache,
            "background_video": str(tmp_path / "background.mp4"),
            "hashtags": HASHTAGS,
        }
        ports.update(overrides)
        return ShortsPipeline(**ports), ports

    return factory
