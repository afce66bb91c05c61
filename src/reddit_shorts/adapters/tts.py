"""INarrator adapter: streaming speech with ElevenLabs, Edge-TTS and gTTS fallbacks."""

from typing import Callable, Iterator, List, Optional, Tuple

import edge_tts
from elevenlabs.client import ElevenLabs
from gtts import gTTS

from reddit_shorts import config
from reddit_shorts.errors import NarrationError
from reddit_shorts.ports.interfaces import INarrator


class StreamingNarrator(INarrator):
    """
    Generates narration audio as a stream of mp3 chunks.

    Priority order: ElevenLabs > Edge-TTS > gTTS. The next engine is tried
    only when an engine fails before producing any audio; a failure in the
    middle of a stream aborts the narration.
    """

    def __init__(
        self,
        use_elevenlabs: Optional[bool] = None,
        use_edge_tts: Optional[bool] = None,
        use_gtts: bool = True,
        elevenlabs_api_key: Optional[str] = None,
        voice_id: Optional[str] = None,
        model_id: Optional[str] = None,
        edge_voice: Optional[str] = None,
        language: str = "en",
    ):
        if use_elevenlabs is None:
            use_elevenlabs = config.TTS_USE_ELEVENLABS
        if use_edge_tts is None:
            use_edge_tts = config.TTS_USE_EDGE_TTS

        api_key = elevenlabs_api_key if elevenlabs_api_key is not None else config.ELEVENLABS_API_KEY
        self.use_elevenlabs = bool(use_elevenlabs and api_key)
        self.use_edge_tts = use_edge_tts
        self.use_gtts = use_gtts
        self.voice_id = voice_id or config.ELEVENLABS_VOICE_ID
        self.model_id = model_id or config.ELEVENLABS_MODEL_ID
        self.edge_voice = edge_voice or config.TTS_EDGE_VOICE
        self.language = language
        self.tld = "com"
        self.elevenlabs_client = ElevenLabs(api_key=api_key) if self.use_elevenlabs else None

    def _engines(self) -> List[Tuple[str, Callable[[str], Iterator[bytes]]]]:
        engines = []
        if self.use_elevenlabs:
            engines.append(("ElevenLabs", self._stream_elevenlabs))
        if self.use_edge_tts:
            engines.append(("Edge-TTS", self._stream_edge_tts))
        if self.use_gtts:
            engines.append(("gTTS", self._stream_gtts))
        return engines

    def stream_speech(self, text: str) -> Iterator[bytes]:
        if not text.strip():
            raise NarrationError("Nothing to narrate")

        engines = self._engines()
        if not engines:
            raise NarrationError("No TTS engine enabled")

        for name, engine in engines:
            started = False
            try:
                for chunk in engine(text):
                    if chunk:
                        started = True
                        yield chunk
            except Exception as e:
                if started:
                    raise NarrationError(f"{name} stream failed mid-way: {e}") from e
                print(f"  ⚠️  {name} failed: {e}, trying next engine")
                continue
            if started:
                return
            print(f"  ⚠️  {name} returned no audio, trying next engine")

        raise NarrationError("All TTS engines failed")

    def _stream_elevenlabs(self, text: str) -> Iterator[bytes]:
        print(f"  🔊 Using ElevenLabs model: {self.model_id}")
        yield from self.elevenlabs_client.text_to_speech.stream(
            text=text,
            voice_id=self.voice_id,
            model_id=self.model_id,
            output_format=config.ELEVENLABS_OUTPUT_FORMAT,
        )

    def _stream_edge_tts(self, text: str) -> Iterator[bytes]:
        print(f"  🔊 Using Edge-TTS voice: {self.edge_voice}")
        communicate = edge_tts.Communicate(text, self.edge_voice)
        for message in communicate.stream_sync():
            if message["type"] == "audio":
                yield message["data"]

    def _stream_gtts(self, text: str) -> Iterator[bytes]:
        print("  🔊 Using gTTS (fallback)")
        yield from gTTS(text=text, lang=self.language, tld=self.tld).stream()
