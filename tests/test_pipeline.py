"""Pipeline routing, failure isolation and idempotent re-runs, all ports faked."""

from __future__ import annotations

import json

from conftest import (
    FakeCardRenderer,
    FakeCompositor,
    FakeNarrator,
    FakeRewriter,
    FakeSplitter,
    FakeUploader,
    make_post,
    sentences,
)
from reddit_shorts.domain.models import ArtifactKind
from reddit_shorts.domain.naming import artifact_key

LONG_BODY = sentences(450)  # with the 3 title words: segments of 153, 150 and 150 words


def test_short_post_becomes_single_clip_without_part_label(build_pipeline):
    pipeline, ports = build_pipeline([make_post()])

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert report.segments_rendered == 1
    titles = [upload["title"] for upload in ports["uploader"].uploads]
    assert titles == ["Short Title #shorts"]
    assert ports["uploader"].uploads[0]["description"] == "A description"
    assert ports["post_source"].calls == [("AmItheAsshole", "top.json?t=all")]


def test_long_post_is_segmented_and_each_part_published(build_pipeline, store):
    pipeline, ports = build_pipeline([make_post(body=LONG_BODY)])

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert report.segments_rendered == 3
    titles = [upload["title"] for upload in ports["uploader"].uploads]
    assert titles == [
        "Short Title - Part 1 #shorts",
        "Short Title - Part 2 #shorts",
        "Short Title - Part 3 #shorts",
    ]
    narrated = ports["narrator"].calls
    assert [len(text.split()) for text in narrated] == [153, 150, 150]
    for index in (1, 2, 3):
        for kind in (ArtifactKind.AUDIO, ArtifactKind.SCREENSHOT, ArtifactKind.VIDEO, ArtifactKind.PUBLISHED):
            assert store.exists(artifact_key("AmItheAsshole", "short_title", kind, index))


def test_card_shows_post_chrome_with_segment_text(build_pipeline):
    pipeline, ports = build_pipeline([make_post(body=LONG_BODY, title="Am I wrong & sorry")])

    pipeline.run([("AmItheAsshole", "top.json?t=all")])

    markups = ports["card_renderer"].markups
    assert len(markups) == 3
    for markup, text in zip(markups, ports["narrator"].calls):
        assert "r/AmItheAsshole" in markup
        assert "u/throwaway" in markup
        assert "Am I wrong &amp; sorry" in markup
        assert "1200" in markup and "300" in markup
        assert text.split()[-1] in markup
    assert markups[0] != markups[1]


def test_rejected_posts_make_no_external_calls(build_pipeline):
    posts = [
        make_post(post_id="a", title="UPDATE: my story"),
        make_post(post_id="b", body="small update here. " + sentences(20)),
        make_post(post_id="c", body=sentences(601)),
    ]
    pipeline, ports = build_pipeline(posts)

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert report.posts_seen == 3
    assert report.posts_skipped == 3
    assert ports["rewriter"].calls == []
    assert ports["narrator"].calls == []
    assert ports["uploader"].uploads == []


def test_rerun_with_populated_cache_makes_no_external_calls(build_pipeline, store, title_cache):
    first, _ = build_pipeline([make_post(body=LONG_BODY)])
    first.run([("AmItheAsshole", "top.json?t=all")])

    rewriter, narrator, cards = FakeRewriter(), FakeNarrator(), FakeCardRenderer()
    compositor, uploader = FakeCompositor(), FakeUploader()
    second, _ = build_pipeline(
        [make_post(body=LONG_BODY)],
        rewriter=rewriter,
        narrator=narrator,
        card_renderer=cards,
        compositor=compositor,
        uploader=uploader,
    )
    report = second.run([("AmItheAsshole", "top.json?t=all")])

    assert rewriter.calls == []
    assert narrator.calls == []
    assert cards.markups == []
    assert compositor.calls == []
    assert uploader.uploads == []
    assert report.segments_rendered == 3
    assert second.cache.misses == 0


def test_narration_failure_abandons_only_that_segment(build_pipeline, store):
    body = sentences(150, word="alpha") + " " + sentences(150, word="bravo") + " " + sentences(150, word="charlie")
    narrator = FakeNarrator(fail_on="bravo")
    pipeline, ports = build_pipeline([make_post(body=body)], narrator=narrator)

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert report.segments_rendered == 2
    assert report.segments_failed == 1
    titles = [upload["title"] for upload in ports["uploader"].uploads]
    assert titles == ["Short Title - Part 1 #shorts", "Short Title - Part 3 #shorts"]
    assert not store.exists(artifact_key("AmItheAsshole", "short_title", ArtifactKind.AUDIO, 2))
    assert not store.exists(artifact_key("AmItheAsshole", "short_title", ArtifactKind.SCREENSHOT, 2))
    assert len(ports["compositor"].calls) == 2


def test_composition_failure_is_local_and_leaves_no_video(build_pipeline, store):
    pipeline, ports = build_pipeline([make_post()], compositor=FakeCompositor(fail=True))

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert report.segments_failed == 1
    assert ports["uploader"].uploads == []
    assert not store.exists(artifact_key("AmItheAsshole", "short_title", ArtifactKind.VIDEO, 1))
    # audio and card are kept for the next run
    assert store.exists(artifact_key("AmItheAsshole", "short_title", ArtifactKind.AUDIO, 1))


def test_upload_failure_does_not_block_later_parts_and_is_retried_next_run(build_pipeline):
    uploader = FakeUploader(fail_titles=["Part 2"])
    pipeline, _ = build_pipeline([make_post(body=LONG_BODY)], uploader=uploader)

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert len(uploader.uploads) == 3
    assert report.upload_failures == 1
    assert len(report.published) == 2

    retry_uploader = FakeUploader()
    rerun, _ = build_pipeline([make_post(body=LONG_BODY)], uploader=retry_uploader)
    rerun.run([("AmItheAsshole", "top.json?t=all")])
    assert [u["title"] for u in retry_uploader.uploads] == ["Short Title - Part 2 #shorts"]


def test_short_title_is_cached_across_runs(build_pipeline, title_cache):
    pipeline, _ = build_pipeline([make_post(title="A very long original title")])
    pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert title_cache.get("A very long original title") == "Short Title"
    with open(title_cache.cache_file, encoding="utf-8") as f:
        assert json.load(f) == {"A very long original title": "Short Title"}


def test_long_render_is_split_into_chunks_with_part_labels(build_pipeline):
    splitter = FakeSplitter(duration=250.0, chunk_durations=[150.0, 100.0])
    pipeline, ports = build_pipeline([make_post()], splitter=splitter)

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert len(splitter.split_calls) == 1
    _, chunk_seconds, stem, min_tail, max_clip = splitter.split_calls[0]
    assert (chunk_seconds, min_tail, max_clip) == (150.0, 30.0, 180.0)
    assert stem == "chunk_short_title_part1"
    assert [c.duration for c in report.clips] == [150.0, 100.0]
    titles = [upload["title"] for upload in ports["uploader"].uploads]
    assert titles == ["Short Title - Part 1 #shorts", "Short Title - Part 2 #shorts"]

    again_splitter = FakeSplitter(duration=250.0)
    rerun, _ = build_pipeline([make_post()], splitter=again_splitter, uploader=FakeUploader())
    rerun_report = rerun.run([("AmItheAsshole", "top.json?t=all")])
    assert again_splitter.split_calls == []
    assert [c.duration for c in rerun_report.clips] == [150.0, 100.0]


def test_split_chunks_of_a_segmented_post_use_dotted_labels(build_pipeline):
    splitter = FakeSplitter(duration=250.0, chunk_durations=[150.0, 100.0])
    pipeline, ports = build_pipeline([make_post(body=LONG_BODY)], splitter=splitter)

    pipeline.run([("AmItheAsshole", "top.json?t=all")])

    titles = [upload["title"] for upload in ports["uploader"].uploads]
    assert titles[:2] == ["Short Title - Part 1.1 #shorts", "Short Title - Part 1.2 #shorts"]
    assert len(titles) == 6


def test_upload_disabled_renders_without_publishing(build_pipeline):
    pipeline, ports = build_pipeline([make_post()], upload_after=False)

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert report.segments_rendered == 1
    assert ports["uploader"].uploads == []


def test_failed_description_is_not_cached(build_pipeline, store):
    pipeline, ports = build_pipeline([make_post()], rewriter=FakeRewriter(description=None))

    pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert ports["uploader"].uploads[0]["description"] == ""
    assert not store.exists(artifact_key("AmItheAsshole", "short_title", ArtifactKind.DESCRIPTION))


def test_empty_card_abandons_segment_before_composition(build_pipeline, store):
    pipeline, ports = build_pipeline([make_post()], card_renderer=FakeCardRenderer(png=b""))

    report = pipeline.run([("AmItheAsshole", "top.json?t=all")])

    assert report.segments_failed == 1
    assert ports["compositor"].calls == []
    assert ports["uploader"].uploads == []
    assert not store.exists(artifact_key("AmItheAsshole", "short_title", ArtifactKind.SCREENSHOT, 1))
