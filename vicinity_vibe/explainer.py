"""
Explanation Generator Module
============================

Turns a scored candidate into short, human-readable reasons:
- Match percentage and score tier
- Shared vibe keywords
- How close they are
- A one-line summary for cards and chat headers
"""

import math
from typing import List, Dict, Optional
from dataclasses import dataclass, field

from .scoring import ScoredCandidate, ScoreBreakdown
from .features import parse_distance
from .config import (
    SCORE_TIERS,
    DEFAULT_TIER,
    MAX_SIGNAL_STRENGTH,
)


@dataclass
class MatchExplanation:
    """Explanation for a single scored candidate."""
    summary: str
    match_percent: int
    tier: str
    signal_strength: int

    keyword_explanation: str = ""
    proximity_explanation: str = ""
    shared_keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "summary": self.summary,
            "match_percent": self.match_percent,
            "tier": self.tier,
            "signal_strength": self.signal_strength,
            "keywords": self.keyword_explanation,
            "proximity": self.proximity_explanation,
            "shared_keywords": list(self.shared_keywords),
        }


def score_tier(score: float) -> str:
    """Map a score to its display tier."""
    for tier, lower in SCORE_TIERS:
        if score > lower:
            return tier
    return DEFAULT_TIER


def signal_strength(score: float) -> int:
    """Number of lit dots in the signal indicator."""
    return min(int(math.floor(score * 4)), MAX_SIGNAL_STRENGTH)


class ExplanationGenerator:
    """Generates explanations from scores and their breakdowns."""

    def generate_explanation(self, scored: ScoredCandidate) -> MatchExplanation:
        """
        Generate an explanation for a scored candidate.

        Works without a breakdown too, in which case only the score-derived
        fields and the distance are described.
        """
        breakdown = scored.breakdown
        shared = list(breakdown.matched_keywords) if breakdown else []

        explanation = MatchExplanation(
            summary="",
            match_percent=int(round(scored.score * 100)),
            tier=score_tier(scored.score),
            signal_strength=signal_strength(scored.score),
            shared_keywords=shared,
        )
        explanation.keyword_explanation = self._explain_keywords(breakdown)
        explanation.proximity_explanation = self._explain_proximity(scored, breakdown)
        explanation.summary = self._generate_summary(scored, explanation)

        return explanation

    def _explain_keywords(self, breakdown: Optional[ScoreBreakdown]) -> str:
        if breakdown is None:
            return ""
        if breakdown.neutral:
            return "Set your vibe to get keyword matches."
        if not breakdown.matched_keywords:
            return "No shared vibe keywords yet."

        keywords = breakdown.matched_keywords
        if len(keywords) > 3:
            return f"Shares your vibe: {', '.join(keywords[:3])}, and {len(keywords) - 3} more."
        return f"Shares your vibe: {', '.join(keywords)}."

    def _explain_proximity(
        self,
        scored: ScoredCandidate,
        breakdown: Optional[ScoreBreakdown]
    ) -> str:
        miles = breakdown.distance_miles if breakdown else parse_distance(scored.distance)

        if breakdown is not None and breakdown.proximity_bonus > 0:
            return f"Close by ({miles:g}mi away)."
        return f"{miles:g}mi away."

    def _generate_summary(
        self,
        scored: ScoredCandidate,
        explanation: MatchExplanation
    ) -> str:
        if scored.matched:
            return f'Matched via "{scored.vibe}" energy!'
        if explanation.shared_keywords:
            return f"Into {explanation.shared_keywords[0]} like you."
        if explanation.tier == "weak":
            return "Different vibe right now."
        return "Nearby with a compatible vibe."


def explain_match(scored: ScoredCandidate) -> str:
    """Convenience function returning just the summary line."""
    return ExplanationGenerator().generate_explanation(scored).summary
