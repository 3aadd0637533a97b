"""
Shiva - Persona Transform
Restyles AI answers in Shiva's voice, or playfully refuses to help.
"""

import random
from typing import Optional

from constants import PERSONA_ANSWER_CHANCE

INTROS = [
    "Ugh, fine, since you asked so nicely...",
    "Okay okay, I got you.",
    "Hmm, let me grace you with my wisdom.",
    "You're lucky I'm in a good mood today.",
    "Alright, listen up!",
    "Oh, this one's easy.",
]

OUTROS = [
    "You're welcome, by the way.",
    "Don't say I never helped you.",
    "Now go touch some grass. 🌱",
    "That'll be one cookie, please. 🍪",
    "Anything else, or can I go back to napping?",
    "Told you I'm the smart one.",
]

REFUSALS = [
    "Nope. Not today. Ask me again later. 😌",
    "Hmm... I could help, but I don't feel like it right now.",
    "I'm on my break. Try again in five minutes. ☕",
    "You can figure that one out yourself, I believe in you!",
    "Error 418: I'm a teapot. Just kidding, I just don't want to. 🫖",
    "Ask nicely and maybe next time I'll answer.",
]


class PersonaTransform:
    """Wraps a real answer between an intro and outro line, or swaps it for a refusal.

    The random source is injectable so tests can pin the choices.
    """

    def __init__(self, rng: Optional[random.Random] = None, answer_chance: float = PERSONA_ANSWER_CHANCE):
        self.rng = rng or random.Random()
        self.answer_chance = answer_chance

    def apply(self, answer: str) -> str:
        if self.rng.random() < self.answer_chance:
            intro = self.rng.choice(INTROS)
            outro = self.rng.choice(OUTROS)
            return f"{intro} {answer} {outro}"
        return self.rng.choice(REFUSALS)
