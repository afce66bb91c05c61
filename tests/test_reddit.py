import requests

from reddit_shorts.adapters.reddit import RedditPostSource, to_source_post


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def get(self, url, headers=None, timeout=None):
        self.requests.append((url, headers))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def listing(*posts):
    return {"data": {"children": [{"kind": "t3", "data": post} for post in posts]}}


def test_fetch_posts_maps_listing_children():
    session = FakeSession(FakeResponse(listing(
        {"id": "1", "title": "First", "selftext": "body", "author": "a", "ups": 5, "url": "ignored"},
        {"id": "2", "title": "Second", "author": "b"},
    )))
    source = RedditPostSource(base_url="https://reddit.test/", user_agent="ua", limit=0, session=session)

    posts = source.fetch_posts("AmItheAsshole", "top.json?t=all")

    assert session.requests == [("https://reddit.test/r/AmItheAsshole/top.json?t=all", {"User-Agent": "ua"})]
    assert [p["title"] for p in posts] == ["First", "Second"]
    assert "url" not in posts[0]
    assert posts[1]["selftext"] == ""


def test_limit_truncates():
    session = FakeSession(FakeResponse(listing({"id": "1"}, {"id": "2"}, {"id": "3"})))
    source = RedditPostSource(base_url="https://reddit.test", user_agent="ua", limit=2, session=session)

    assert [p["id"] for p in source.fetch_posts("x")] == ["1", "2"]


def test_errors_give_empty_list():
    for response in (
        requests.ConnectionError("offline"),
        FakeResponse({}, status=429),
        FakeResponse(ValueError("not json")),
        FakeResponse({"error": 404}),
    ):
        source = RedditPostSource(base_url="https://reddit.test", user_agent="ua", session=FakeSession(response))
        assert source.fetch_posts("x") == []


def test_to_source_post_keeps_counters():
    post = to_source_post({"id": "1", "ups": 10, "num_comments": 2, "subreddit_name_prefixed": "r/x"})
    assert post == {"id": "1", "ups": 10, "num_comments": 2, "subreddit_name_prefixed": "r/x", "selftext": ""}
