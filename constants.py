"""
Shiva - Constants
Centralized configuration constants to avoid magic numbers throughout the codebase.
"""

# =============================================================================
# CONVERSATION CONTEXT
# =============================================================================

CONTEXT_CAPACITY = 10            # Turns kept per channel (oldest evicted first)

# =============================================================================
# CACHING
# =============================================================================

ACTIVATION_CACHE_TTL = 300       # Seconds an AI-chat activation answer stays cached (5 minutes)

# =============================================================================
# MESSAGE PROCESSING
# =============================================================================

MAX_MESSAGE_LENGTH = 2000        # Discord's max message length
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif', '.webp')
IMAGE_DOWNLOAD_TIMEOUT = 30      # Seconds for the shared aiohttp session

# =============================================================================
# PERSONA
# =============================================================================

PERSONA_ANSWER_CHANCE = 0.65     # Chance the real answer is kept (wrapped); otherwise a refusal

# =============================================================================
# HEARTBEAT
# =============================================================================

HEARTBEAT_TIMEOUT = 10           # Seconds before the status ping gives up

# =============================================================================
# USER-FACING FALLBACK MESSAGES
# =============================================================================

NO_RESPONSE_FALLBACK = "Sorry, I couldn't generate a response at this time."
API_ERROR_FALLBACK = "Sorry, I encountered an error processing your request."
DISPATCH_ERROR_REPLY = "Sorry, I encountered an error processing your message."
