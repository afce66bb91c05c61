"""
Port interfaces (SOLID – Dependency Inversion).
Implement these in adapters; the application layer depends only on these abstractions.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from reddit_shorts.domain.models import ArtifactKey, Clip, SourcePost


class IPostSource(ABC):
    """Source of posts for one community."""

    @abstractmethod
    def fetch_posts(self, subreddit: str, sort: str = "top.json?t=all") -> List[SourcePost]:
        """Fetch a ranked list of posts. Errors degrade to an empty list."""
        pass


class ITextRewriter(ABC):
    """Language-model text operations. Failures fall back instead of raising."""

    @abstractmethod
    def correct_text(self, text: str) -> str:
        """Fix spelling, grammar and punctuation; return `text` unchanged on failure."""
        pass

    @abstractmethod
    def shorten_title(self, title: str) -> str:
        """Shorten a title to about 20 characters; return `title` on failure."""
        pass

    @abstractmethod
    def generate_description(self, title: str, post_text: str) -> Optional[str]:
        """Write a video description; None on failure."""
        pass


class INarrator(ABC):
    """Streaming text-to-speech."""

    @abstractmethod
    def stream_speech(self, text: str) -> Iterator[bytes]:
        """Yield encoded audio (mp3) chunks as they arrive. Raises NarrationError."""
        pass


class ICardRenderer(ABC):
    """HTML to image renderer."""

    @abstractmethod
    def render_card(self, markup: str) -> bytes:
        """Render markup to PNG bytes (transparent background). Raises CardRenderError."""
        pass


class IVideoCompositor(ABC):
    """Background + caption + narration -> encoded clip."""

    @abstractmethod
    def compose(
        self,
        background_path: str,
        caption_path: str,
        narration_path: str,
        output_path: str,
    ) -> Clip:
        """Write the composed video to `output_path`. Raises CompositionError."""
        pass


class IClipSplitter(ABC):
    """Duration-based splitting of rendered clips."""

    @abstractmethod
    def duration(self, path: str) -> float:
        """Duration of a media file in seconds."""
        pass

    @abstractmethod
    def split(
        self,
        clip_path: str,
        chunk_seconds: float,
        output_dir: str,
        stem: str,
        min_tail_seconds: float = 30.0,
        max_clip_seconds: Optional[float] = None,
    ) -> List[Clip]:
        """
        Cut into chunks (stream copy) and merge a short tail, unless the merged
        chunk would run longer than `max_clip_seconds`. Raises SplitError.
        """
        pass


class IUploader(ABC):
    """Publish video (e.g. YouTube)."""

    @abstractmethod
    def upload_video(
        self,
        video_path: str,
        title: str,
        description: str = "",
        tags: Optional[List[str]] = None,
        category_id: str = "22",
        privacy_status: str = "public",
    ) -> Optional[Dict[str, Any]]:
        """Upload video; return result dict with 'video_id' and 'url', or None."""
        pass


class IArtifactStore(ABC):
    """Keyed storage of derived artifacts. Presence of a key means the artifact is complete."""

    @abstractmethod
    def exists(self, key: ArtifactKey) -> bool:
        pass

    @abstractmethod
    def read(self, key: ArtifactKey) -> bytes:
        pass

    @abstractmethod
    def write(self, key: ArtifactKey, data: bytes) -> None:
        pass

    @abstractmethod
    def write_stream(self, key: ArtifactKey, chunks: Iterable[bytes]) -> int:
        """Append chunks as they arrive; publish the artifact only once the stream ends."""
        pass

    @abstractmethod
    def write_file(self, key: ArtifactKey, producer: Callable[[Path], Any]) -> None:
        """Let `producer` write a local file that becomes the artifact when it returns."""
        pass

    @abstractmethod
    def path(self, key: ArtifactKey) -> Path:
        """Local filesystem path of the artifact (for ffmpeg and friends)."""
        pass

    @abstractmethod
    def delete(self, key: ArtifactKey) -> None:
        pass


class ITitleCache(ABC):
    """Persistent raw title -> short title map."""

    @abstractmethod
    def get(self, title: str) -> Optional[str]:
        pass

    @abstractmethod
    def put(self, title: str, short_title: str) -> None:
        """Insert and persist immediately."""
        pass
