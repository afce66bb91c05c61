"""Domain models – posts stay dict-compatible with the Reddit listing JSON."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypedDict


class SourcePost(TypedDict, total=False):
    """A Reddit post as returned by the listing endpoint (`children[].data`)."""
    id: str
    title: str
    selftext: str  # body text, may be empty
    author: str
    subreddit: str
    subreddit_name_prefixed: str  # e.g. "r/AmItheAsshole", shown on the caption card
    ups: int
    num_comments: int


@dataclass(frozen=True)
class Segment:
    """A contiguous slice of a post's corrected text, narrated as one video."""
    index: int  # 1-based, determines part numbering
    text: str
    post_id: str = ""


class ArtifactKind(Enum):
    """Derived artifact types: (folder, file prefix, extension)."""
    AUDIO = ("audio", "audio", "mp3")
    SCREENSHOT = ("screenshot", "screenshot", "png")
    VIDEO = ("video", "video", "mp4")
    DESCRIPTION = ("description", "description", "txt")
    CORRECTED_TEXT = ("corrected", "corrected", "txt")
    CHUNK_MANIFEST = ("chunks", "chunks", "json")
    PUBLISHED = ("published", "published", "json")

    @property
    def folder(self) -> str:
        return self.value[0]

    @property
    def prefix(self) -> str:
        return self.value[1]

    @property
    def extension(self) -> str:
        return self.value[2]


@dataclass(frozen=True)
class ArtifactKey:
    """Deterministic name of an artifact in the store."""
    subreddit: str
    title_slug: str
    kind: ArtifactKind
    part: Optional[str] = None  # segment index ("3") or segment/chunk ("3_2")

    @property
    def relative_path(self) -> str:
        name = f"{self.kind.prefix}_{self.title_slug}"
        if self.part is not None:
            name += f"_part{self.part}"
        return "/".join(
            [self.subreddit, self.title_slug, self.kind.folder, f"{name}.{self.kind.extension}"]
        )

    def __str__(self) -> str:
        return self.relative_path


@dataclass(frozen=True)
class SegmentAssets:
    segment_index: int
    audio: ArtifactKey
    image: ArtifactKey
    video: ArtifactKey


@dataclass(frozen=True)
class Clip:
    """A finished audio+video file and its duration in seconds."""
    path: str
    duration: float


@dataclass(frozen=True)
class PublishedClip:
    title: str
    video_id: str
    url: str = ""
    path: str = ""
