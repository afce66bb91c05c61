import os
from dotenv import load_dotenv

load_dotenv()

# LLM Configuration (priority: Gemini → OpenRouter → Ollama)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "tngtech/deepseek-r1t2-chimera:free")
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.1:8b")

# Reddit Configuration
# Comma separated "name:sort" pairs; sort is the listing path appended to /r/<name>/
SUBREDDITS = os.getenv(
    "SUBREDDITS",
    "AmItheAsshole:top.json?t=all,"
    "relationshipadvice:top.json?t=all,"
    "relationship_advice:top.json?t=month",
)
REDDIT_BASE_URL = os.getenv("REDDIT_BASE_URL", "https://www.reddit.com")
REDDIT_USER_AGENT = os.getenv("REDDIT_USER_AGENT", "reddit-shorts/0.3 (automated shorts pipeline)")
REDDIT_POST_LIMIT = int(os.getenv("REDDIT_POST_LIMIT", "0"))  # 0 = everything the listing returns

# TTS Configuration
# Priority order: ElevenLabs > Edge-TTS > gTTS
ELEVENLABS_API_KEY = os.getenv("ELEVENLABS_API_KEY", "")
ELEVENLABS_VOICE_ID = os.getenv("ELEVENLABS_VOICE_ID", "pNInz6obpgDQGcFmaJgB")  # Adam - male, deep, clear
ELEVENLABS_MODEL_ID = os.getenv("ELEVENLABS_MODEL_ID", "eleven_turbo_v2_5")
ELEVENLABS_OUTPUT_FORMAT = os.getenv("ELEVENLABS_OUTPUT_FORMAT", "mp3_44100_128")
TTS_USE_ELEVENLABS = os.getenv("TTS_USE_ELEVENLABS", "true").lower() == "true"
TTS_USE_EDGE_TTS = os.getenv("TTS_USE_EDGE_TTS", "true").lower() == "true"
TTS_EDGE_VOICE = os.getenv("TTS_EDGE_VOICE", "en-US-GuyNeural")
# Edge-TTS storytelling voices:
# - "en-US-GuyNeural" (US English, Male)
# - "en-US-AriaNeural" (US English, Female)
# - "en-GB-RyanNeural" (UK English, Male)

# Video Configuration
VIDEO_WIDTH = 1080
VIDEO_HEIGHT = 1920  # Vertical format for YouTube Shorts (9:16)
FPS = int(os.getenv("FPS", "30"))
BACKGROUND_VIDEO_PATH = os.getenv("BACKGROUND_VIDEO_PATH", "videoplayback.mp4")
BACKGROUND_SEEK_SECONDS = 5.0  # skip the intro of the background footage
CAPTION_WIDTH = 900
CAPTION_OPACITY = 0.9
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")

# Caption card (headless browser screenshot)
CARD_VIEWPORT_WIDTH = 600
CARD_VIEWPORT_HEIGHT = 400

# Post admission and segmentation
MAX_POST_WORDS = 600  # posts with more body words are skipped
LONG_POST_WORDS = 400  # corrected text above this is split into segments
SEGMENT_MIN_WORDS = 150
EXCLUDED_KEYWORD = "update"

# Duration-based splitting of rendered clips
MAX_CLIP_SECONDS = float(os.getenv("MAX_CLIP_SECONDS", "180"))  # YouTube Shorts limit
SPLIT_CHUNK_SECONDS = float(os.getenv("SPLIT_CHUNK_SECONDS", "150"))
MIN_TAIL_SECONDS = 30.0  # shorter final chunks are merged into the previous one

# Storage
ARTIFACT_ROOT = os.getenv("ARTIFACT_ROOT", "output")
TITLE_CACHE_FILE = os.getenv("TITLE_CACHE_FILE", "shortTitleCache.json")

# YouTube Upload Configuration
YOUTUBE_CREDENTIALS_FILE = os.getenv("YOUTUBE_CREDENTIALS_FILE", "client_secret.json")
YOUTUBE_TOKEN_FILE = os.getenv("YOUTUBE_TOKEN_FILE", "token.pickle")
# Refresh-token credentials take precedence over the token file when all three are set
YOUTUBE_CLIENT_ID = os.getenv("YOUTUBE_CLIENT_ID", "")
YOUTUBE_CLIENT_SECRET = os.getenv("YOUTUBE_CLIENT_SECRET", "")
YOUTUBE_REFRESH_TOKEN = os.getenv("YOUTUBE_REFRESH_TOKEN", "")
YOUTUBE_AUTO_UPLOAD = os.getenv("YOUTUBE_AUTO_UPLOAD", "false").lower() == "true"
YOUTUBE_PRIVACY_STATUS = os.getenv("YOUTUBE_PRIVACY_STATUS", "public")  # public, unlisted, private
YOUTUBE_CATEGORY_ID = os.getenv("YOUTUBE_CATEGORY_ID", "22")  # 22 = People & Blogs
HASHTAGS = os.getenv("HASHTAGS", "#relationshipadvice #shorts #trending #viral")
YOUTUBE_TAGS = ["reddit", "reddit stories", "relationship advice", "shorts", "storytime"]


def parse_subreddits(value: str):
    """Parse "name:sort,name:sort" into [(name, sort), ...]. Missing sort means top of all time."""
    result = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        name, _, sort = item.partition(":")
        result.append((name.strip(), sort.strip() or "top.json?t=all"))
    return result
