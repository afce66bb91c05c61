"""Caption card markup: post chrome around one segment's text."""

from html import escape

from reddit_shorts.domain.models import SourcePost

CARD_STYLE = """
html, body { margin: 0; padding: 0; background: transparent; font-family: system-ui, -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, 'Open Sans', 'Helvetica Neue', sans-serif; }
.container { max-width: 600px; margin: auto; background-color: #121212; border: 1px solid #080808; border-radius: 20px; box-shadow: 0 2px 4px rgba(0, 0, 0, 0.1); padding: 20px; display: flex; flex-direction: column; gap: 10px; box-sizing: border-box; }
.sub { font-size: 30px; font-weight: bold; color: #C2C2C2; }
.author { font-size: 14px; color: #C2C2C2; }
.title { font-size: 20px; font-weight: bold; color: #F3F3F3; }
.content { font-size: 16px; line-height: 1.5; color: #A6A6A6; margin-bottom: 10px; white-space: pre-line; }
.bottomInfo { display: flex; flex-direction: row; gap: 20px; }
.ups, .comments { font-size: 14px; display: flex; flex-direction: row; align-items: center; gap: 5px; }
.ups { color: #D93900; }
.comments { color: #f3f3f3; }
"""

UPVOTE_ICON = (
    '<svg fill="#D93900" height="16" viewBox="0 0 20 20" width="16" xmlns="http://www.w3.org/2000/svg">'
    '<path d="M10 19c-.072 0-.145 0-.218-.006A4.1 4.1 0 0 1 6 14.816V11H2.862a1.751 1.751 0 0 1-1.234-2.993L9.41.28'
    'a.836.836 0 0 1 1.18 0l7.782 7.727A1.751 1.751 0 0 1 17.139 11H14v3.882a4.134 4.134 0 0 1-.854 2.592A3.99 3.99 0 0 1 10 19Z">'
    "</path></svg>"
)

COMMENT_ICON = (
    '<svg fill="currentColor" height="16" viewBox="0 0 20 20" width="16" xmlns="http://www.w3.org/2000/svg">'
    '<path d="M10 19H1.871a.886.886 0 0 1-.798-.52.886.886 0 0 1 .158-.941L3.1 15.771A9 9 0 1 1 10 19Zm-6.549-1.5H10'
    'a7.5 7.5 0 1 0-5.323-2.219l.54.545L3.451 17.5Z"></path></svg>'
)


def build_card_html(post: SourcePost, content: str) -> str:
    """Card for one segment: post-level header and counters, segment text as the body."""
    subreddit = post.get("subreddit_name_prefixed") or "unknown"
    author = post.get("author") or "unknown"
    title = post.get("title") or ""
    body = content or "[No text content]"
    return f"""<html>
  <head><style>{CARD_STYLE}</style></head>
  <body>
    <div class="container">
      <div class="sub">{escape(subreddit)}</div>
      <div class="author">u/{escape(author)}</div>
      <div class="title">{escape(title)}</div>
      <div class="content">{escape(body)}</div>
      <div class="bottomInfo">
        <div class="ups">{UPVOTE_ICON} {int(post.get("ups") or 0)}</div>
        <div class="comments">{COMMENT_ICON} {int(post.get("num_comments") or 0)}</div>
      </div>
    </div>
  </body>
</html>"""
