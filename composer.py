"""
Shiva - Response Composer
Builds the Gemini request from persona framing + channel history, and post-processes the answer.
"""

from typing import List, Optional, Tuple

from config import BOT_NAME, OWNER_NAME, BOT_TONE
from constants import NO_RESPONSE_FALLBACK, API_ERROR_FALLBACK
from conversation import ConversationStore, BOT
from gemini import GeminiClient, GeminiError, text_part, image_part
from persona import PersonaTransform
import logger as log

# (mime_type, base64 data)
ImagePayload = Tuple[str, str]

SYSTEM_TEMPLATE = (
    "You are {bot_name}, a helpful Discord bot assistant. Your tone is {tone}. "
    "You are talking with {username}. "
    "If someone asks who your owner is, answer: 'My owner is {owner}.' "
    "If anyone asks about the API you use, say: 'I use a private API by {owner}.' "
    "For all other questions, do not mention your owner or the API unless directly asked. "
    "Keep your responses concise and friendly. Don't use markdown formatting."
)

ACKNOWLEDGEMENT = (
    "Understood. I will only say my owner is {owner} if asked, "
    "and only mention the API if asked."
)


class ResponseComposer:
    """Turns a prompt (plus optional images) into a reply text.

    Reads channel history but never writes it; recording turns is up to the caller.
    """

    def __init__(
        self,
        client: GeminiClient,
        conversations: ConversationStore,
        persona: Optional[PersonaTransform] = None,
        bot_name: str = BOT_NAME,
        owner_name: str = OWNER_NAME,
        tone: str = BOT_TONE
    ):
        self.client = client
        self.conversations = conversations
        self.persona = persona
        self.bot_name = bot_name
        self.owner_name = owner_name
        self.tone = tone

    def build_contents(self, prompt: str, channel_id: int, username: str,
                       images: Optional[List[ImagePayload]] = None) -> List[dict]:
        """Build the Gemini `contents` list: framing, history, then the new turn."""
        system_text = SYSTEM_TEMPLATE.format(
            bot_name=self.bot_name, tone=self.tone, username=username, owner=self.owner_name
        )
        contents = [
            {"role": "user", "parts": [text_part(system_text)]},
            {"role": "model", "parts": [text_part(ACKNOWLEDGEMENT.format(owner=self.owner_name))]},
        ]

        for turn in self.conversations.get(channel_id):
            contents.append({
                "role": "model" if turn.role == BOT else "user",
                "parts": [text_part(turn.text)]
            })

        if images and not prompt:
            prompt = "What's in this image?"
        parts = [text_part(prompt)]
        for mime_type, data in images or []:
            parts.append(image_part(mime_type, data))
        contents.append({"role": "user", "parts": parts})

        return contents

    async def compose_reply(self, prompt: str, channel_id: int, username: str,
                            images: Optional[List[ImagePayload]] = None) -> str:
        """Ask Gemini for a reply; always returns text safe to show in chat."""
        contents = self.build_contents(prompt, channel_id, username, images)

        try:
            answer = await self.client.generate(contents)
        except GeminiError as e:
            log.error(f"Gemini request failed: {e}")
            return API_ERROR_FALLBACK

        if answer is None:
            log.warn("Gemini returned no usable answer")
            return NO_RESPONSE_FALLBACK

        if self.persona:
            answer = self.persona.apply(answer)
        return answer
