"""Application layer – use cases and pipeline orchestration."""

from reddit_shorts.application.assets import AssetCache, SegmentAssetPipeline
from reddit_shorts.application.pipeline import RunReport, ShortsPipeline

__all__ = ["AssetCache", "RunReport", "SegmentAssetPipeline", "ShortsPipeline"]
