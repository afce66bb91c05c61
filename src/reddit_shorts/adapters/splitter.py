"""IClipSplitter adapter: ffmpeg segment muxer and concat demuxer, stream copy only."""

import re
import subprocess
from pathlib import Path
from typing import List, Optional

from pydub.utils import mediainfo

from reddit_shorts import config
from reddit_shorts.domain.models import Clip
from reddit_shorts.domain.rebalance import rebalance_chunks
from reddit_shorts.errors import SplitError
from reddit_shorts.ports.interfaces import IClipSplitter


class FFmpegClipSplitter(IClipSplitter):
    """Cuts rendered clips into fixed-length chunks without re-encoding."""

    def __init__(self, ffmpeg_binary: str = None):
        self.ffmpeg = ffmpeg_binary or config.FFMPEG_BINARY

    def _run(self, command: List[str]) -> None:
        try:
            process = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise SplitError(f"Could not run {command[0]}: {e}") from e
        if process.returncode != 0:
            tail = (process.stderr or "").strip().splitlines()[-3:]
            raise SplitError(f"Command failed ({process.returncode}): {' '.join(command)}\n" + "\n".join(tail))

    def duration(self, path: str) -> float:
        return float(mediainfo(str(path))["duration"])

    def _probe_or_zero(self, path: Path) -> float:
        try:
            return self.duration(str(path))
        except (KeyError, ValueError, OSError) as e:
            print(f"  ⚠️  Error getting duration of {path.name}: {e}")
            return 0.0

    def cut(self, clip_path: str, chunk_seconds: float, output_dir: str, stem: str) -> List[Path]:
        """Run the segment muxer; return chunk files in chronological order."""
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        for stale in out_dir.glob(f"{stem}_*.mp4"):
            stale.unlink()

        self._run([
            self.ffmpeg, "-hide_banner", "-y",
            "-i", str(clip_path),
            "-c", "copy",
            "-map", "0",
            "-segment_time", f"{chunk_seconds:g}",
            "-f", "segment",
            "-reset_timestamps", "1",
            str(out_dir / f"{stem}_%d.mp4"),
        ])

        pattern = re.compile(rf"^{re.escape(stem)}_(\d+)\.mp4$")
        numbered = []
        for path in out_dir.iterdir():
            match = pattern.match(path.name)
            if match:
                numbered.append((int(match.group(1)), path))
        return [path for _, path in sorted(numbered)]

    def concat(self, first: Path, second: Path) -> Path:
        """Append `second` to `first` in place and delete `second`."""
        list_file = first.with_name(f"{first.stem}_concat.txt")
        merged = first.with_name(f"{first.stem}_merged.mp4")
        list_file.write_text(
            "".join(f"file '{p.resolve().as_posix()}'\n" for p in (first, second)),
            encoding="utf-8",
        )
        try:
            self._run([
                self.ffmpeg, "-hide_banner", "-y",
                "-f", "concat", "-safe", "0",
                "-i", str(list_file),
                "-c", "copy",
                str(merged),
            ])
        finally:
            list_file.unlink(missing_ok=True)
        merged.replace(first)
        second.unlink()
        return first

    def split(
        self,
        clip_path: str,
        chunk_seconds: float,
        output_dir: str,
        stem: str,
        min_tail_seconds: float = 30.0,
        max_clip_seconds: Optional[float] = None,
    ) -> List[Clip]:
        print(f"  ✂️  Splitting video: {clip_path} into chunks of {chunk_seconds:g} seconds")
        chunks = self.cut(clip_path, chunk_seconds, output_dir, stem)
        if not chunks:
            raise SplitError(f"ffmpeg produced no chunks for {clip_path}")
        print(f"  ✅ Video split into {len(chunks)} chunks")

        durations = [self._probe_or_zero(path) for path in chunks]
        if len(chunks) > 1:
            try:
                merged = rebalance_chunks(chunks, durations, self.concat, min_tail_seconds, max_clip_seconds)
            except SplitError as e:
                print(f"  ⚠️  Error merging last chunks: {e}")
                merged = chunks
            if len(merged) < len(chunks):
                print(
                    f"  🔗 Last chunk was only {durations[-1]:.1f}s; merged into {merged[-1].name}. "
                    f"Total chunks now: {len(merged)}"
                )
                durations = durations[:-2] + [self._probe_or_zero(merged[-1])]
            chunks = merged

        return [Clip(path=str(path), duration=d) for path, d in zip(chunks, durations)]
