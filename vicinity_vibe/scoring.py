"""
Vibe Compatibility Scoring
==========================

Scores nearby candidates against the local user's vibe and ranks them
best-first. Each score combines:
1. Keyword overlap between the two vibe texts
2. A proximity bonus that fades out with distance
3. A small random jitter so equal scores don't always tie

Mathematical Formulation:
-------------------------

    overlap  = |{t in T_self : t in T_candidate}|      (T_self may repeat)
    S_kw     = overlap / max(|T_self|, 1) * 0.7 + 0.2 * [overlap > 0]
             = 0.5                                     if T_self is empty
    B_prox   = max(0, 0.15 * (1 - d / 2))
    raw      = clip(S_kw + B_prox, 0.10, 0.99)
    score    = clip(raw + (u - 0.5) * 0.05, 0.10, 0.99),  u ~ U[0, 1)

A candidate is a match when score > threshold (0.65 by default).
"""

import random
import logging
import numpy as np
from typing import List, Dict, Optional, Callable, Union, Any
from dataclasses import dataclass, field

from .features import VibeProfile, tokenize, as_profile
from .config import (
    ScoringWeights,
    DEFAULT_WEIGHTS,
    MATCH_THRESHOLD,
)

logger = logging.getLogger(__name__)

RandomFn = Callable[[], float]


def no_jitter() -> float:
    """Randomness source that always lands on the centre (zero jitter)."""
    return 0.5


def is_match(score: float, threshold: Optional[float] = None) -> bool:
    """A score is a match only when strictly above the threshold."""
    if threshold is None:
        threshold = MATCH_THRESHOLD
    return score > threshold


@dataclass
class ScoreBreakdown:
    """How a candidate's score was computed."""
    keyword_score: float = 0.0
    proximity_bonus: float = 0.0
    raw_score: float = 0.0
    jitter: float = 0.0
    distance_miles: float = 0.0
    matched_keywords: List[str] = field(default_factory=list)
    neutral: bool = False  # Self vibe was empty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword_score": round(self.keyword_score, 3),
            "proximity_bonus": round(self.proximity_bonus, 3),
            "raw_score": round(self.raw_score, 3),
            "jitter": round(self.jitter, 4),
            "distance_miles": self.distance_miles,
            "matched_keywords": list(self.matched_keywords),
        }


@dataclass
class ScoredCandidate:
    """A candidate profile with its compatibility score attached."""
    profile: VibeProfile
    score: float
    matched: bool = False
    breakdown: Optional[ScoreBreakdown] = None

    @property
    def vibe(self) -> str:
        return self.profile.vibe

    @property
    def distance(self):
        return self.profile.distance

    @property
    def name(self) -> Optional[str]:
        return self.profile.name

    def to_dict(self) -> Dict[str, Any]:
        data = self.profile.to_dict()
        data["score"] = round(self.score, 4)
        data["matched"] = self.matched
        if self.breakdown is not None:
            data["breakdown"] = self.breakdown.to_dict()
        return data


class ScoringEngine:
    """
    Keyword + proximity scoring engine for nearby candidates.

    Holds the weights, the match threshold and the randomness source.
    Scores are never cached: every call recomputes from its inputs.
    """

    def __init__(
        self,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        threshold: Optional[float] = None,
        rng_fn: Optional[RandomFn] = None
    ):
        """
        Initialize scoring engine.

        Args:
            weights: Scoring weights configuration
            threshold: Match threshold (defaults to MATCH_THRESHOLD)
            rng_fn: Callable returning floats in [0, 1); random.random if None
        """
        self.weights = weights
        self.threshold = MATCH_THRESHOLD if threshold is None else threshold
        self.rng_fn = rng_fn or random.random

    def score_candidates(
        self,
        self_vibe: Optional[str],
        candidates: List[Union[VibeProfile, Dict]],
        return_breakdown: bool = False
    ) -> List[ScoredCandidate]:
        """
        Score all candidates against the self vibe.

        Args:
            self_vibe: The local user's vibe text (may be empty)
            candidates: VibeProfile instances or dicts with vibe/distance
            return_breakdown: Whether to attach a ScoreBreakdown

        Returns:
            ScoredCandidate list sorted by score, best first
        """
        self_tokens = tokenize(self_vibe)
        results = []

        for candidate in candidates:
            profile = as_profile(candidate)
            breakdown = self._score_profile(self_tokens, profile)

            score = self._clamp(breakdown.raw_score + breakdown.jitter)

            results.append(ScoredCandidate(
                profile=profile,
                score=score,
                matched=is_match(score, self.threshold),
                breakdown=breakdown if return_breakdown else None,
            ))

        results.sort(key=lambda sc: sc.score, reverse=True)

        logger.debug(
            "Scored %d candidates against %d self tokens (top=%s)",
            len(results),
            len(self_tokens),
            f"{results[0].score:.3f}" if results else "n/a",
        )
        return results

    def _score_profile(
        self,
        self_tokens: List[str],
        profile: VibeProfile
    ) -> ScoreBreakdown:
        """Compute every score component for one candidate."""
        breakdown = ScoreBreakdown()

        breakdown.keyword_score = self._compute_keyword_score(
            self_tokens, tokenize(profile.vibe), breakdown
        )

        breakdown.distance_miles = profile.distance_miles
        breakdown.proximity_bonus = self._compute_proximity_bonus(
            breakdown.distance_miles
        )

        breakdown.raw_score = self._clamp(
            breakdown.keyword_score + breakdown.proximity_bonus
        )
        breakdown.jitter = self._draw_jitter()

        return breakdown

    def _compute_keyword_score(
        self,
        self_tokens: List[str],
        target_tokens: List[str],
        breakdown: ScoreBreakdown
    ) -> float:
        """
        Keyword overlap score.

        Counts self tokens present in the candidate's tokens (membership,
        so a repeated self token counts every time it appears).
        """
        if not self_tokens:
            breakdown.neutral = True
            return self.weights.neutral_keyword_score

        target_set = set(target_tokens)
        matched = [t for t in self_tokens if t in target_set]
        breakdown.matched_keywords = list(dict.fromkeys(matched))

        score = (len(matched) / max(len(self_tokens), 1)) * self.weights.keyword_weight
        if matched:
            score += self.weights.overlap_bonus

        return score

    def _compute_proximity_bonus(self, distance_miles: float) -> float:
        """Linear bonus for closeness, zero at or beyond the radius."""
        falloff = 1 - distance_miles / self.weights.proximity_radius_miles
        return max(0.0, self.weights.proximity_max_bonus * falloff)

    def _draw_jitter(self) -> float:
        return (self.rng_fn() - 0.5) * self.weights.jitter_spread

    def _clamp(self, value: float) -> float:
        return float(np.clip(value, self.weights.score_floor, self.weights.score_ceiling))


def score_candidates(
    self_vibe: Optional[str],
    candidates: List[Union[VibeProfile, Dict]],
    threshold: Optional[float] = None,
    rng_fn: Optional[RandomFn] = None,
    return_breakdown: bool = False
) -> List[ScoredCandidate]:
    """
    Convenience function: score and rank candidates with default weights.

    Args:
        self_vibe: The local user's vibe text
        candidates: Profiles to score
        threshold: Match threshold for the `matched` flag
        rng_fn: Randomness source (pass no_jitter for deterministic scores)
        return_breakdown: Attach score breakdowns

    Returns:
        ScoredCandidate list, best first
    """
    engine = ScoringEngine(threshold=threshold, rng_fn=rng_fn)
    return engine.score_candidates(self_vibe, candidates, return_breakdown)
