"""
Per-segment asset generation: narration → caption card → composite video.
Every artifact goes through AssetCache, so re-runs skip finished work.
"""

from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

from reddit_shorts.application.card import build_card_html
from reddit_shorts.domain.models import ArtifactKey, ArtifactKind, Segment, SegmentAssets, SourcePost
from reddit_shorts.domain.naming import artifact_key
from reddit_shorts.errors import CardRenderError, CompositionError, NarrationError
from reddit_shorts.ports.interfaces import (
    IArtifactStore,
    ICardRenderer,
    INarrator,
    IVideoCompositor,
)

Produced = Union[bytes, str, Iterable[bytes], None]


class AssetCache:
    """
    Skip-if-present layer over an artifact store.

    Presence of the key is the only check; the store guarantees that a key
    exists only once its artifact was completely written.
    """

    def __init__(self, store: IArtifactStore):
        self.store = store
        self.hits = 0
        self.misses = 0

    def get_or_create(self, key: ArtifactKey, producer: Callable[[], Produced]) -> Optional[ArtifactKey]:
        """
        Return `key` if the artifact exists, otherwise store what `producer()`
        returns (bytes, text, or an iterable of byte chunks written as they
        arrive). A producer returning None or empty persists nothing.
        """
        if self.store.exists(key):
            self.hits += 1
            print(f"  ♻️  {key.kind.folder.capitalize()} already exists at {key}. Skipping.")
            return key

        self.misses += 1
        produced = producer()
        if produced is None:
            return None
        if isinstance(produced, str):
            produced = produced.encode("utf-8")
        if isinstance(produced, bytes):
            if not produced:
                return None
            self.store.write(key, produced)
        elif self.store.write_stream(key, produced) == 0:
            self.store.delete(key)
            return None
        return key

    def get_or_create_file(self, key: ArtifactKey, producer: Callable[[Path], Any]) -> ArtifactKey:
        """Like get_or_create for producers that write a local file (`producer(path)`)."""
        if self.store.exists(key):
            self.hits += 1
            print(f"  ♻️  {key.kind.folder.capitalize()} already exists at {key}. Skipping.")
            return key

        self.misses += 1
        self.store.write_file(key, producer)
        return key

    def read_text(self, key: ArtifactKey) -> str:
        return self.store.read(key).decode("utf-8")


class SegmentAssetPipeline:
    """Produces audio, caption image and composite video for one segment."""

    def __init__(
        self,
        cache: AssetCache,
        narrator: INarrator,
        card_renderer: ICardRenderer,
        compositor: IVideoCompositor,
        background_video: str,
    ):
        self.cache = cache
        self.narrator = narrator
        self.card_renderer = card_renderer
        self.compositor = compositor
        self.background_video = background_video

    def produce(
        self,
        post: SourcePost,
        segment: Segment,
        subreddit: str,
        title_slug: str,
        segment_count: int = 1,
    ) -> Optional[SegmentAssets]:
        """Return the segment's assets, or None when the segment had to be abandoned."""
        audio_key = artifact_key(subreddit, title_slug, ArtifactKind.AUDIO, segment.index)
        image_key = artifact_key(subreddit, title_slug, ArtifactKind.SCREENSHOT, segment.index)
        video_key = artifact_key(subreddit, title_slug, ArtifactKind.VIDEO, segment.index)

        try:
            if not self.cache.get_or_create(audio_key, lambda: self._narrate(segment, segment_count)):
                print(f"  ❌ No narration audio for segment {segment.index}. Skipping segment.")
                return None
        except NarrationError as e:
            print(f"  ❌ Speech generation failed for segment {segment.index}: {e}. Skipping segment.")
            return None

        try:
            if not self.cache.get_or_create(
                image_key,
                lambda: self.card_renderer.render_card(build_card_html(post, segment.text)),
            ):
                print(f"  ❌ Screenshot for segment {segment.index} came back empty. Skipping segment.")
                return None
        except CardRenderError as e:
            print(f"  ❌ Screenshot failed for segment {segment.index}: {e}. Skipping segment.")
            return None

        store = self.cache.store
        try:
            self.cache.get_or_create_file(
                video_key,
                lambda tmp_path: self.compositor.compose(
                    self.background_video,
                    str(store.path(image_key)),
                    str(store.path(audio_key)),
                    str(tmp_path),
                ),
            )
        except CompositionError as e:
            print(f"  ❌ Error creating video segment {segment.index}: {e}")
            return None

        return SegmentAssets(
            segment_index=segment.index,
            audio=audio_key,
            image=image_key,
            video=video_key,
        )

    def _narrate(self, segment: Segment, segment_count: int) -> Iterable[bytes]:
        print(f"  🎙️  Generating speech for segment {segment.index}/{segment_count}")
        return self.narrator.stream_speech(segment.text)
