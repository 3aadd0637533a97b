"""
Shiva - Canned Responses
Answers identity questions (owner, API, name) without asking the model.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

from config import BOT_NAME, OWNER_NAME

# Checked in this order; the first category with a matching rule wins
CATEGORY_ORDER = ("owner", "api", "name", "name_origin")


@dataclass(frozen=True)
class CannedAnswer:
    category: str
    reply: str


def _compile(patterns: List[str]) -> List[Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


def build_categories(bot_name: str = BOT_NAME, owner_name: str = OWNER_NAME) -> List[Tuple[str, List[Pattern], str]]:
    """Build the (category, patterns, reply) table for a bot identity."""
    bot = re.escape(bot_name)
    owner = re.escape(owner_name)

    return [
        ("owner", _compile([
            r"who('?s| is) your owner",
            r"who owns you",
            r"who is huzaifa",
            rf"who is {owner}",
            r"owner\??$",
        ]), f"My owner is {owner_name}."),
        ("api", _compile([
            r"what api",
            r"which api",
            r"api you use",
            r"backend.*api",
        ]), f"I use a private API by {owner_name}."),
        ("name", _compile([
            r"what('?s| is) your name",
            r"who are you",
            r"what should i call you",
            r"^\s*your name\??\s*$",
        ]), f"My name is {bot_name}."),
        ("name_origin", _compile([
            r"why (are you|is your name) (called|named)",
            r"where does your name come from",
            r"meaning of your name",
            rf"what does (your name|{bot}) mean",
            r"who named you",
        ]), f"{owner_name} named me {bot_name}. It's the name they picked for their bot, and I like it!"),
    ]


class CannedResponseGate:
    """Ordered regex matcher for identity/meta questions."""

    def __init__(self, bot_name: str = BOT_NAME, owner_name: str = OWNER_NAME):
        self.categories = build_categories(bot_name, owner_name)

    def classify(self, text: str) -> Optional[CannedAnswer]:
        """Get the canned answer for a message, or None to let the AI handle it."""
        if not text:
            return None
        for category, patterns, reply in self.categories:
            if any(p.search(text) for p in patterns):
                return CannedAnswer(category, reply)
        return None
