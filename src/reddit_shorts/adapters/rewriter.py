"""ITextRewriter adapter: prompts for correction, title shortening and descriptions."""

from typing import Optional

from reddit_shorts.adapters.llm import LLMClient, LLMError
from reddit_shorts.ports.interfaces import ITextRewriter

CORRECT_PROMPT = (
    "Correct the following text for spelling and grammar without changing any of the actual "
    "words, slang, abbreviations, or shorthand. Also add periods, punctuation, and new lines "
    "where needed to make it follow normal human speech patterns. Return only the corrected "
    "text without any commentary:\n\n{text}"
)

SHORTEN_PROMPT = (
    "Shorten the following title while retaining its meaning and ensure that it is no more "
    "than 20 characters long. Return only the shortened title without any additional "
    'commentary: "{title}"'
)

DESCRIPTION_PROMPT = (
    "Based on the following title and post text, generate a concise and engaging description "
    "for a YouTube video. Return only the description text without any commentary.\n\n"
    'Title: "{title}"\n\nPost Text: "{post_text}"'
)


def _clean_response(text: str) -> str:
    """Strip whitespace and wrapping quotes that models like to add."""
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        text = text[1:-1].strip()
    return text


class LLMTextRewriter(ITextRewriter):
    """Wraps LLMClient. Every failure degrades to the caller's fallback."""

    def __init__(self, client: Optional[LLMClient] = None):
        self._client = client or LLMClient()

    def _ask(self, prompt: str, num_predict: int = 2048) -> Optional[str]:
        try:
            result = self._client.generate(prompt, {"temperature": 1.0, "num_predict": num_predict})
        except LLMError as e:
            print(f"  ⚠️  {e}")
            return None
        text = _clean_response(result.get("response") or "")
        return text or None

    def correct_text(self, text: str) -> str:
        print("  ✏️  Correcting text...")
        corrected = self._ask(CORRECT_PROMPT.format(text=text))
        if corrected is None:
            print("  ⚠️  Text correction failed, using original text")
            return text
        print("  ✅ Text correction complete")
        return corrected

    def shorten_title(self, title: str) -> str:
        print(f'  ✂️  Shortening title: "{title}"')
        short = self._ask(SHORTEN_PROMPT.format(title=title), num_predict=64)
        if short is None:
            print("  ⚠️  Title shortening failed, using original title")
            return title
        print(f'  ✅ Title shortened to: "{short}"')
        return short

    def generate_description(self, title: str, post_text: str) -> Optional[str]:
        print(f'  📝 Generating video description for: "{title}"')
        description = self._ask(DESCRIPTION_PROMPT.format(title=title, post_text=post_text), num_predict=200)
        if description is None:
            print("  ⚠️  Description generation failed")
        return description
