"""IPostSource adapter for Reddit's public JSON listings."""

from typing import List, Optional

import requests

from reddit_shorts import config
from reddit_shorts.domain.models import SourcePost
from reddit_shorts.ports.interfaces import IPostSource

POST_FIELDS = (
    "id",
    "title",
    "selftext",
    "author",
    "subreddit",
    "subreddit_name_prefixed",
    "ups",
    "num_comments",
)


def to_source_post(data: dict) -> SourcePost:
    """Keep the listing fields the pipeline uses."""
    post: SourcePost = {field: data[field] for field in POST_FIELDS if field in data}
    post.setdefault("selftext", "")
    return post


class RedditPostSource(IPostSource):
    """Fetches `https://www.reddit.com/r/<subreddit>/<sort>`. Any error gives an empty list."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        limit: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or config.REDDIT_BASE_URL).rstrip("/")
        self.user_agent = user_agent or config.REDDIT_USER_AGENT
        self.limit = config.REDDIT_POST_LIMIT if limit is None else limit
        self.session = session or requests.Session()

    def fetch_posts(self, subreddit: str, sort: str = "top.json?t=all") -> List[SourcePost]:
        url = f"{self.base_url}/r/{subreddit}/{sort}"
        print(f"  🌐 Fetching posts from URL: {url}")
        try:
            response = self.session.get(url, headers={"User-Agent": self.user_agent}, timeout=30)
            response.raise_for_status()
            children = response.json()["data"]["children"]
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            print(f"  ⚠️  Error fetching posts from r/{subreddit}: {e}")
            return []

        posts = [to_source_post(child.get("data", {})) for child in children]
        if self.limit:
            posts = posts[: self.limit]
        print(f"  ✅ Fetched {len(posts)} posts from r/{subreddit}")
        return posts
