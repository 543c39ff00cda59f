# -*- coding: utf-8 -*-
"""Random prompt words."""

from __future__ import annotations

import random
from collections.abc import Sequence


PROMPT_WORDS: tuple[str, ...] = (
    "lantern", "harbor", "echo", "threshold", "orchard", "static", "compass",
    "ember", "tidewater", "attic", "migration", "salt", "fever", "window",
    "ledger", "frost", "signal", "inheritance", "bruise", "meadow", "engine",
    "silence", "ferry", "honey", "borrowed", "midnight", "quarry", "velvet",
    "riddle", "ash", "lullaby", "crossing", "mirror", "drought", "parade",
    "hollow", "telegram", "juniper", "ruins", "kitchen", "storm", "promise",
    "glacier", "stranger", "thread", "lighthouse", "fracture", "moth",
    "carnival", "root", "winter", "departure", "rust", "pilgrim", "clockwork",
    "garden", "tide", "feather", "border", "homecoming",
)


class PromptSource:
    """Pick prompt words at random from a fixed list."""

    def __init__(self, words: Sequence[str] = PROMPT_WORDS, rng: random.Random | None = None) -> None:
        if not words:
            raise ValueError("PromptSource needs at least one word")
        self._words = tuple(words)
        self._rng = rng or random.Random()

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    def next_prompt(self) -> str:
        return self._rng.choice(self._words)
