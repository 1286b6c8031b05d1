"""
Swipe Deck
==========

State behind the swipe screen: a ranked deck of nearby people and a
cursor. "Vibe" on a candidate above the match threshold surfaces a match;
anything else moves to the next candidate, wrapping back to the top.
"""

import logging
from typing import List, Dict, Optional, Union
from dataclasses import dataclass

from .features import VibeProfile, as_profile
from .scoring import ScoringEngine, ScoredCandidate, RandomFn, is_match

logger = logging.getLogger(__name__)

MATCHED = "matched"
ADVANCED = "advanced"
EMPTY = "empty"


@dataclass
class SwipeOutcome:
    """Result of a single swipe."""
    action: str
    candidate: Optional[ScoredCandidate] = None
    index: int = 0

    @property
    def is_match(self) -> bool:
        return self.action == MATCHED


class SwipeDeck:
    """
    Ranked candidates plus the position of the card on screen.

    The deck rescores from scratch whenever the self vibe or the
    candidate list changes; the cursor position is kept.
    """

    def __init__(
        self,
        candidates: List[Union[VibeProfile, Dict]],
        self_vibe: str = "",
        engine: Optional[ScoringEngine] = None,
        rng_fn: Optional[RandomFn] = None
    ):
        self.engine = engine or ScoringEngine(rng_fn=rng_fn)
        self.self_vibe = self_vibe or ""
        self.index = 0
        self._profiles = [as_profile(c) for c in candidates]
        self.ranked: List[ScoredCandidate] = []
        self._rescore()

    def __len__(self) -> int:
        return len(self.ranked)

    @property
    def current(self) -> Optional[ScoredCandidate]:
        if not self.ranked:
            return None
        return self.ranked[self.index]

    def swipe(self, vibe: bool) -> SwipeOutcome:
        """
        Act on the current card.

        Args:
            vibe: True for "vibe" (like), False for pass

        Returns:
            SwipeOutcome; on a match the cursor stays put
        """
        candidate = self.current
        if candidate is None:
            return SwipeOutcome(action=EMPTY)

        if vibe and is_match(candidate.score, self.engine.threshold):
            logger.debug("Matched %s at %.3f", candidate.name, candidate.score)
            return SwipeOutcome(action=MATCHED, candidate=candidate, index=self.index)

        self.index = (self.index + 1) % len(self.ranked)
        return SwipeOutcome(action=ADVANCED, candidate=self.current, index=self.index)

    def update_vibe(self, self_vibe: str) -> None:
        """Replace the self vibe and recompute every score."""
        self.self_vibe = self_vibe or ""
        self._rescore()

    def set_candidates(self, candidates: List[Union[VibeProfile, Dict]]) -> None:
        """Replace the candidate list and recompute every score."""
        self._profiles = [as_profile(c) for c in candidates]
        self._rescore()

    def _rescore(self) -> None:
        self.ranked = self.engine.score_candidates(self.self_vibe, self._profiles)
        if self.ranked:
            self.index %= len(self.ranked)
        else:
            self.index = 0
