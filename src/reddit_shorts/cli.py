"""
CLI entrypoint:
  python -m reddit_shorts [--subreddit AmItheAsshole:top.json?t=all] [--upload]
  python -m reddit_shorts --split long_video.mp4 [--chunk-seconds 60]
"""

import argparse
import os
from pathlib import Path


def _split_only(video_path: str, chunk_seconds: float) -> None:
    from reddit_shorts import config
    from reddit_shorts.adapters.splitter import FFmpegClipSplitter

    source = Path(video_path)
    clips = FFmpegClipSplitter().split(
        str(source),
        chunk_seconds,
        str(source.parent),
        f"{source.stem}_segment",
        config.MIN_TAIL_SECONDS,
    )
    for clip in clips:
        print(f"{clip.path}\t{clip.duration:.2f}s")


def main() -> None:
    from reddit_shorts import config

    parser = argparse.ArgumentParser(
        description="Turn Reddit text posts into narrated vertical shorts"
    )
    parser.add_argument(
        "--subreddit",
        action="append",
        metavar="NAME[:SORT]",
        help="Subreddit and listing sort (repeatable), e.g. 'AmItheAsshole:top.json?t=week'",
    )
    parser.add_argument("--limit", type=int, help="Maximum posts per subreddit")
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Upload clips to YouTube after generation",
    )
    parser.add_argument("--artifact-root", default=config.ARTIFACT_ROOT, help="Directory for generated artifacts")
    parser.add_argument("--background", default=config.BACKGROUND_VIDEO_PATH, help="Background video to loop")
    parser.add_argument("--split", metavar="VIDEO", help="Only split an existing video into chunks and exit")
    parser.add_argument("--chunk-seconds", type=float, default=60.0, help="Chunk length for --split")
    args = parser.parse_args()

    if args.split:
        _split_only(args.split, args.chunk_seconds)
        return

    from reddit_shorts.adapters import RedditPostSource, default_adapters
    from reddit_shorts.application.pipeline import ShortsPipeline

    if args.upload:
        os.environ["YOUTUBE_AUTO_UPLOAD"] = "true"
    upload_after = (
        os.getenv("YOUTUBE_AUTO_UPLOAD", "false").lower() == "true"
        or args.upload
    )

    if not os.path.exists(args.background):
        parser.error(f"Background video not found: {args.background}")

    subreddits = config.parse_subreddits(",".join(args.subreddit)) if args.subreddit else config.parse_subreddits(config.SUBREDDITS)

    adapters = default_adapters(
        artifact_root=args.artifact_root,
        post_source=RedditPostSource(limit=args.limit),
    )
    pipeline = ShortsPipeline(
        **adapters,
        background_video=args.background,
        upload_after=upload_after,
        category_id=config.YOUTUBE_CATEGORY_ID,
        privacy_status=config.YOUTUBE_PRIVACY_STATUS,
        hashtags=config.HASHTAGS,
        tags=config.YOUTUBE_TAGS,
        max_post_words=config.MAX_POST_WORDS,
        excluded_keyword=config.EXCLUDED_KEYWORD,
        long_post_words=config.LONG_POST_WORDS,
        segment_min_words=config.SEGMENT_MIN_WORDS,
        max_clip_seconds=config.MAX_CLIP_SECONDS,
        split_chunk_seconds=config.SPLIT_CHUNK_SECONDS,
        min_tail_seconds=config.MIN_TAIL_SECONDS,
    )
    pipeline.run(subreddits)


if __name__ == "__main__":
    main()
