from reddit_shorts.application.assets import AssetCache
from reddit_shorts.domain.models import ArtifactKind
from reddit_shorts.domain.naming import artifact_key

KEY = artifact_key("AmItheAsshole", "my_story", ArtifactKind.DESCRIPTION)


def test_producer_runs_once(store):
    cache = AssetCache(store)
    calls = []

    def producer():
        calls.append(1)
        return "text"

    assert cache.get_or_create(KEY, producer) == KEY
    assert cache.get_or_create(KEY, producer) == KEY

    assert len(calls) == 1
    assert (cache.hits, cache.misses) == (1, 1)
    assert cache.read_text(KEY) == "text"


def test_deleted_artifact_is_produced_again(store):
    cache = AssetCache(store)
    cache.get_or_create(KEY, lambda: b"first")
    store.delete(KEY)

    cache.get_or_create(KEY, lambda: b"second")

    assert store.read(KEY) == b"second"


def test_empty_results_persist_nothing(store):
    cache = AssetCache(store)

    assert cache.get_or_create(KEY, lambda: None) is None
    assert cache.get_or_create(KEY, lambda: "") is None
    assert cache.get_or_create(KEY, lambda: iter([])) is None
    assert not store.exists(KEY)


def test_streamed_chunks_are_written(store):
    cache = AssetCache(store)
    audio = artifact_key("AmItheAsshole", "my_story", ArtifactKind.AUDIO, 1)

    cache.get_or_create(audio, lambda: (chunk for chunk in [b"ID3", b"data"]))

    assert store.read(audio) == b"ID3data"


def test_file_producer_is_skipped_when_present(store):
    cache = AssetCache(store)
    video = artifact_key("AmItheAsshole", "my_story", ArtifactKind.VIDEO, 1)
    calls = []

    def compose(tmp_path):
        calls.append(tmp_path)
        tmp_path.write_bytes(b"mp4")

    cache.get_or_create_file(video, compose)
    cache.get_or_create_file(video, compose)

    assert len(calls) == 1
    assert store.read(video) == b"mp4"
