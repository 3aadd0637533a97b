"""
Shiva - Configuration
Discord token, Gemini settings, and bot identity.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Discord Bot Token
DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag like 'true', '1', 'yes' from the environment."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_number(name: str, default, cast=float):
    """Read a number from the environment, falling back on bad input."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        return cast(value)
    except ValueError:
        print(f"⚠️ Invalid {name}={value!r}, using {default}")
        return default


# --- Gemini Configuration ---

GEMINI_API_KEY = os.getenv('GEMINI_API_KEY')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.0-flash')
GEMINI_API_URL = os.getenv(
    'GEMINI_API_URL',
    f"https://generativelanguage.googleapis.com/v1beta/models/{GEMINI_MODEL}:generateContent"
)

# Generation settings
GENERATION_CONFIG = {
    "temperature": _env_number('GEMINI_TEMPERATURE', 0.7),
    "topK": _env_number('GEMINI_TOP_K', 40, int),
    "topP": _env_number('GEMINI_TOP_P', 0.95),
    "maxOutputTokens": _env_number('GEMINI_MAX_OUTPUT_TOKENS', 800, int),
}

# --- Bot Identity ---

BOT_NAME = os.getenv('BOT_NAME', 'Shiva')
OWNER_NAME = os.getenv('OWNER_NAME', 'xcho_')
BOT_TONE = os.getenv('BOT_TONE', 'playful, a little sassy, but always friendly')
BOT_AVATAR_URL = os.getenv('BOT_AVATAR_URL', '')

# Wrap AI answers in the persona voice (see persona.py)
PERSONALITY_ENABLED = _env_bool('PERSONALITY_ENABLED', True)

# Operator status endpoint for the "bot is online" ping (empty = disabled)
STATUS_ENDPOINT_URL = os.getenv('STATUS_ENDPOINT_URL', '')

# Prometheus metrics port (0 = disabled)
METRICS_PORT = _env_number('METRICS_PORT', 0, int)

# Data Storage
DATA_DIR = "bot_data"
AI_CHANNELS_FILE = os.path.join(DATA_DIR, "ai_channels.json")
