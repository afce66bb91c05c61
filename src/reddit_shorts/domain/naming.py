"""Artifact naming: title slugs and the keys derived from them."""

import re
from typing import Optional, Union

from reddit_shorts.domain.models import ArtifactKey, ArtifactKind

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def sanitize_title(title: str) -> str:
    """Lower-case, collapse every run of non-alphanumerics to "_", strip outer "_"."""
    return _NON_ALNUM.sub("_", title.lower()).strip("_")


def artifact_key(
    subreddit: str,
    title_slug: str,
    kind: ArtifactKind,
    part: Optional[Union[int, str]] = None,
) -> ArtifactKey:
    return ArtifactKey(
        subreddit=subreddit,
        title_slug=title_slug,
        kind=kind,
        part=None if part is None else str(part),
    )
