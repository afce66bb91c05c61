"""Filesystem artifact store and the JSON title cache."""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional

from reddit_shorts.domain.models import ArtifactKey
from reddit_shorts.ports.interfaces import IArtifactStore, ITitleCache

PARTIAL_SUFFIX = ".part"


class FileSystemArtifactStore(IArtifactStore):
    """
    Artifacts live under `root/<subreddit>/<slug>/<kind>/`.

    Every write goes to a sibling temp file that is renamed into place once
    complete, so an interrupted run never leaves a truncated artifact at the
    key path.
    """

    def __init__(self, root: str = "output"):
        self.root = Path(root)

    def path(self, key: ArtifactKey) -> Path:
        return self.root / key.relative_path

    def exists(self, key: ArtifactKey) -> bool:
        return self.path(key).is_file()

    def read(self, key: ArtifactKey) -> bytes:
        return self.path(key).read_bytes()

    def write(self, key: ArtifactKey, data: bytes) -> None:
        self.write_stream(key, [data])

    def write_stream(self, key: ArtifactKey, chunks: Iterable[bytes]) -> int:
        written = 0

        def produce(tmp_path: Path) -> None:
            nonlocal written
            with open(tmp_path, "wb") as f:
                for chunk in chunks:
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)

        self.write_file(key, produce)
        return written

    def write_file(self, key: ArtifactKey, producer: Callable[[Path], Any]) -> None:
        target = self.path(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        # keep the real extension last so encoders can infer the container
        tmp_path = target.with_name(f"{target.stem}{PARTIAL_SUFFIX}{target.suffix}")
        try:
            producer(tmp_path)
            if not tmp_path.is_file():
                raise FileNotFoundError(f"Producer did not create {tmp_path}")
            os.replace(tmp_path, target)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def delete(self, key: ArtifactKey) -> None:
        self.path(key).unlink(missing_ok=True)


class JsonTitleCache(ITitleCache):
    """Raw title -> short title map, loaded once and rewritten on every insert."""

    def __init__(self, cache_file: str = "shortTitleCache.json"):
        self.cache_file = cache_file
        self._entries: Dict[str, str] = {}
        if os.path.exists(cache_file):
            with open(cache_file, "r", encoding="utf-8") as f:
                self._entries = json.load(f)

    def get(self, title: str) -> Optional[str]:
        return self._entries.get(title) or None

    def put(self, title: str, short_title: str) -> None:
        self._entries[title] = short_title
        self.save()

    def save(self) -> None:
        directory = os.path.dirname(self.cache_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.cache_file, "w", encoding="utf-8") as f:
            json.dump(self._entries, f, indent=2, ensure_ascii=False)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, title: str) -> bool:
        return title in self._entries
