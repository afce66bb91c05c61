"""
Shorts pipeline – orchestrates fetch → filter → correct → segment → assets → split → upload.
Depends only on port interfaces (SOLID – Dependency Inversion).
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from reddit_shorts.application.assets import AssetCache, SegmentAssetPipeline
from reddit_shorts.domain.models import ArtifactKey, ArtifactKind, Clip, PublishedClip, Segment, SourcePost
from reddit_shorts.domain.naming import artifact_key, sanitize_title
from reddit_shorts.domain.policy import admission_rejection, build_publish_title, part_label
from reddit_shorts.domain.segmentation import plan_segments, word_count
from reddit_shorts.errors import SplitError
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


@dataclass
class RunReport:
    """What one run did, for the CLI summary and tests."""
    posts_seen: int = 0
    posts_skipped: int = 0
    segments_rendered: int = 0
    segments_failed: int = 0
    clips: List[Clip] = field(default_factory=list)
    published: List[PublishedClip] = field(default_factory=list)
    upload_failures: int = 0

    def merge(self, other: "RunReport") -> None:
        self.posts_seen += other.posts_seen
        self.posts_skipped += other.posts_skipped
        self.segments_rendered += other.segments_rendered
        self.segments_failed += other.segments_failed
        self.clips.extend(other.clips)
        self.published.extend(other.published)
        self.upload_failures += other.upload_failures


class ShortsPipeline:
    """
    Orchestrates the full shorts generation pipeline.
    All dependencies are injected (ports); no concrete implementations here.
    Stages run strictly one after another; a failed run is resumed by running
    it again, finished artifacts are skipped through the asset cache.
    """

    def __init__(
        self,
        *,
        post_source: IPostSource,
        rewriter: ITextRewriter,
        narrator: INarrator,
        card_renderer: ICardRenderer,
        compositor: IVideoCompositor,
        splitter: IClipSplitter,
        uploader: IUploader,
        store: IArtifactStore,
        title_cache: ITitleCache,
        background_video: str = "videoplayback.mp4",
        upload_after: bool = True,
        category_id: str = "22",
        privacy_status: str = "public",
        hashtags: str = "#relationshipadvice #shorts #trending #viral",
        tags: Optional[List[str]] = None,
        max_post_words: int = 600,
        excluded_keyword: str = "update",
        long_post_words: int = 400,
        segment_min_words: int = 150,
        max_clip_seconds: float = 180.0,
        split_chunk_seconds: float = 150.0,
        min_tail_seconds: float = 30.0,
    ):
        self._posts = post_source
        self._rewriter = rewriter
        self._splitter = splitter
        self._uploader = uploader
        self._store = store
        self._titles = title_cache
        self._cache = AssetCache(store)
        self._assets = SegmentAssetPipeline(
            self._cache, narrator, card_renderer, compositor, background_video
        )
        self._upload_after = upload_after
        self._category_id = category_id
        self._privacy_status = privacy_status
        self._hashtags = hashtags
        self._tags = tags or []
        self._max_post_words = max_post_words
        self._excluded_keyword = excluded_keyword
        self._long_post_words = long_post_words
        self._segment_min_words = segment_min_words
        self._max_clip_seconds = max_clip_seconds
        self._split_chunk_seconds = split_chunk_seconds
        self._min_tail_seconds = min_tail_seconds

    @property
    def cache(self) -> AssetCache:
        return self._cache

    def run(self, subreddits: Sequence[Tuple[str, str]]) -> RunReport:
        """Process every (subreddit, sort) pair in order."""
        report = RunReport()
        for subreddit, sort in subreddits:
            report.merge(self.process_subreddit(subreddit, sort))

        print("\n" + "=" * 60)
        print(
            f"Done: {report.posts_seen} posts, {report.posts_skipped} skipped, "
            f"{report.segments_rendered} segments rendered, {report.segments_failed} failed, "
            f"{len(report.published)} uploaded, {report.upload_failures} upload failures"
        )
        print("=" * 60)
        return report

    def process_subreddit(self, subreddit: str, sort: str = "top.json?t=all") -> RunReport:
        print("=" * 60)
        print(f"Processing subreddit: r/{subreddit}")
        print("=" * 60)
        report = RunReport()
        for post in self._posts.fetch_posts(subreddit, sort):
            report.merge(self.process_post(post, subreddit))
        return report

    def process_post(self, post: SourcePost, subreddit: str) -> RunReport:
        """Filter, segment and render one post; publish every resulting clip."""
        report = RunReport(posts_seen=1)
        title = post.get("title") or ""
        body = post.get("selftext") or ""

        reason = admission_rejection(post, self._max_post_words, self._excluded_keyword)
        if reason:
            print(f'\n⏭️  Skipping post "{title}": {reason}')
            report.posts_skipped = 1
            return report

        print(f'\n📄 Processing post: "{title}"')
        short_title = self._short_title(title)
        slug = sanitize_title(short_title) or sanitize_title(post.get("id") or "post")

        corrected = self._corrected_text(subreddit, slug, f"{title}\n\n{body}")
        texts = plan_segments(corrected, self._long_post_words, self._segment_min_words)
        if len(texts) > 1:
            print(f"  📑 Post has {word_count(corrected)} words; split into {len(texts)} segments.")
        description = self._description(subreddit, slug, title, body)

        segments = [Segment(index=i, text=text, post_id=post.get("id") or "") for i, text in enumerate(texts, 1)]
        for segment in segments:
            assets = self._assets.produce(post, segment, subreddit, slug, len(segments))
            if assets is None:
                report.segments_failed += 1
                continue
            report.segments_rendered += 1

            clips = self._bounded_clips(subreddit, slug, segment, self._store.path(assets.video))
            if clips is None:
                report.segments_failed += 1
                continue
            report.clips.extend(clips)

            if self._upload_after:
                self._publish_segment(report, subreddit, slug, short_title, description, segment, len(segments), clips)
        return report

    def _short_title(self, title: str) -> str:
        cached = self._titles.get(title)
        if cached:
            return cached
        short_title = self._rewriter.shorten_title(title)
        self._titles.put(title, short_title)
        return short_title

    def _corrected_text(self, subreddit: str, slug: str, text: str) -> str:
        key = artifact_key(subreddit, slug, ArtifactKind.CORRECTED_TEXT)
        if self._cache.get_or_create(key, lambda: self._rewriter.correct_text(text)):
            return self._cache.read_text(key)
        return text

    def _description(self, subreddit: str, slug: str, title: str, body: str) -> str:
        key = artifact_key(subreddit, slug, ArtifactKind.DESCRIPTION)
        if self._cache.get_or_create(key, lambda: self._rewriter.generate_description(title, body)):
            return self._cache.read_text(key)
        return ""

    def _bounded_clips(self, subreddit: str, slug: str, segment: Segment, video_path: Path) -> Optional[List[Clip]]:
        """The segment's clip, or its chunks when it is longer than max_clip_seconds."""
        manifest_key = artifact_key(subreddit, slug, ArtifactKind.CHUNK_MANIFEST, segment.index)
        if self._store.exists(manifest_key):
            return self._load_manifest(manifest_key)

        try:
            duration = self._splitter.duration(str(video_path))
        except (KeyError, ValueError, OSError) as e:
            print(f"  ⚠️  Could not read duration of {video_path}: {e}; publishing unsplit")
            return [Clip(path=str(video_path), duration=0.0)]

        if duration <= self._max_clip_seconds:
            return [Clip(path=str(video_path), duration=duration)]

        print(f"  ⏱️  Segment {segment.index} runs {duration:.1f}s (> {self._max_clip_seconds:g}s); splitting")
        chunk_dir = self._store.path(manifest_key).parent / f"part{segment.index}"
        try:
            clips = self._splitter.split(
                str(video_path),
                self._split_chunk_seconds,
                str(chunk_dir),
                f"chunk_{slug}_part{segment.index}",
                self._min_tail_seconds,
                self._max_clip_seconds,
            )
        except SplitError as e:
            print(f"  ❌ Error splitting video: {e}")
            return None

        manifest = [{"path": clip.path, "duration": clip.duration} for clip in clips]
        self._cache.get_or_create(manifest_key, lambda: json.dumps(manifest, indent=2))
        return clips

    def _load_manifest(self, key: ArtifactKey) -> List[Clip]:
        entries = json.loads(self._cache.read_text(key))
        return [Clip(path=entry["path"], duration=float(entry["duration"])) for entry in entries]

    def _publish_segment(
        self,
        report: RunReport,
        subreddit: str,
        slug: str,
        short_title: str,
        description: str,
        segment: Segment,
        segment_count: int,
        clips: List[Clip],
    ) -> None:
        for chunk_index, clip in enumerate(clips, 1):
            label = part_label(segment.index, segment_count, chunk_index, len(clips))
            title = build_publish_title(short_title, label, self._hashtags)
            record_part = str(segment.index) if len(clips) == 1 else f"{segment.index}_{chunk_index}"
            record_key = artifact_key(subreddit, slug, ArtifactKind.PUBLISHED, record_part)

            if self._store.exists(record_key):
                record = json.loads(self._cache.read_text(record_key))
                print(f"  ♻️  Already uploaded as {record.get('video_id')}: {title}")
                continue

            published = self._upload(clip, title, description, record_key)
            if published is None:
                report.upload_failures += 1
            else:
                report.published.append(published)

    def _upload(self, clip: Clip, title: str, description: str, record_key: ArtifactKey) -> Optional[PublishedClip]:
        """Upload one clip and record it; failures are logged and reported as None."""
        try:
            result = self._uploader.upload_video(
                video_path=clip.path,
                title=title,
                description=description,
                tags=self._tags,
                category_id=self._category_id,
                privacy_status=self._privacy_status,
            )
        except Exception as e:
            print(f"  ⚠️  Error uploading {clip.path}: {e}")
            return None
        if not result:
            print(f"  ⚠️  Upload failed for {clip.path}, video is saved locally")
            return None

        published = PublishedClip(
            title=title,
            video_id=str(result.get("video_id", "")),
            url=result.get("url", ""),
            path=clip.path,
        )
        self._store.write(record_key, json.dumps(asdict(published), indent=2).encode("utf-8"))
        return published
