"""Exceptions raised by pipeline stages. All of them are per-segment or per-clip failures."""


class ShortsError(Exception):
    """Base class for pipeline errors."""


class NarrationError(ShortsError):
    """Speech synthesis failed; the segment is abandoned."""


class CardRenderError(ShortsError):
    """Caption card could not be rendered."""


class CompositionError(ShortsError):
    """Video composition failed for one segment."""


class SplitError(ShortsError):
    """ffmpeg could not cut or merge a rendered clip."""


class PublishError(ShortsError):
    """Upload of a clip failed."""
