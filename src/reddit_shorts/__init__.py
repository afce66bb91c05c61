"""
Reddit Shorts – pipeline that turns Reddit text posts into narrated shorts.

Use from project root:
  from reddit_shorts.application.pipeline import ShortsPipeline
  from reddit_shorts.adapters import default_adapters
  pipeline = ShortsPipeline(**default_adapters())
  pipeline.run([("AmItheAsshole", "top.json?t=all")])

Other post sources, TTS engines or publishers implement the ports in
reddit_shorts.ports and are injected through default_adapters(**overrides).
"""

__version__ = "0.3.0"
