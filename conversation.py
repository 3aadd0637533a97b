"""
Shiva - Conversation Store
Rolling per-channel history of the last few turns, fed back to the model.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List

from constants import CONTEXT_CAPACITY

USER = "user"
BOT = "bot"


@dataclass(frozen=True)
class Turn:
    """One recorded message in a channel's history."""
    role: str
    text: str


class ConversationStore:
    """In-memory conversation context, one bounded queue per channel.

    Eviction is FIFO by insertion: once a channel holds ``capacity`` turns,
    each append drops exactly the oldest one. Channels are never forgotten
    for the lifetime of the process.
    """

    def __init__(self, capacity: int = CONTEXT_CAPACITY):
        self.capacity = capacity
        self._contexts: Dict[int, Deque[Turn]] = {}

    def _context(self, channel_id: int) -> Deque[Turn]:
        context = self._contexts.get(channel_id)
        if context is None:
            context = deque(maxlen=self.capacity)
            self._contexts[channel_id] = context
        return context

    def append(self, channel_id: int, role: str, text: str):
        """Record a turn for a channel."""
        self._context(channel_id).append(Turn(role, text))

    def get(self, channel_id: int) -> List[Turn]:
        """Get a channel's turns, oldest first (empty if nothing recorded yet)."""
        return list(self._context(channel_id))

    def clear(self, channel_id: int):
        """Forget a channel's history."""
        if channel_id in self._contexts:
            self._contexts[channel_id].clear()

    def channel_count(self) -> int:
        return len(self._contexts)
