"""
Vibe Matcher
============

Orchestrates one ranking pass over the people nearby:
1. Normalize candidate records into profiles
2. Apply the optional search filter
3. Score and rank against the self vibe
4. Attach explanations
5. Return a report that serializes to dict / JSON

This module ties the scorer and explainer together for callers such as
the CLI.
"""

import json
import logging
from typing import List, Dict, Optional, Union, Any
from dataclasses import dataclass, field

from .features import VibeProfile, as_profile, filter_profiles
from .scoring import ScoringEngine, RandomFn
from .explainer import ExplanationGenerator, MatchExplanation
from .config import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
)

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Single ranked candidate with explanation."""
    profile: VibeProfile
    score: float
    matched: bool
    explanation: MatchExplanation

    # Optional detailed breakdown
    breakdown: Optional[Dict] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.profile.to_dict()
        data.update({
            "score": round(self.score, 4),
            "matched": self.matched,
            "match_percent": self.explanation.match_percent,
            "tier": self.explanation.tier,
            "explanation": self.explanation.summary,
        })
        if self.breakdown is not None:
            data["breakdown"] = self.breakdown
        return data


@dataclass
class MatchReport:
    """Complete ranking output."""
    self_vibe: str
    threshold: float
    candidate_count: int
    results: List[MatchResult] = field(default_factory=list)

    @property
    def matches(self) -> List[MatchResult]:
        return [r for r in self.results if r.matched]

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "self_vibe": self.self_vibe,
            "threshold": self.threshold,
            "candidate_count": self.candidate_count,
            "match_count": len(self.matches),
            "results": [r.to_dict() for r in self.results],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


class VibeMatcher:
    """
    Ranks nearby people for the local user.

    Usage:
        matcher = VibeMatcher()
        report = matcher.rank("coffee jazz", SAMPLE_PROFILES)
        print(report.to_json())
    """

    def __init__(
        self,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        threshold: Optional[float] = None,
        rng_fn: Optional[RandomFn] = None
    ):
        self.scorer = ScoringEngine(weights, threshold=threshold, rng_fn=rng_fn)
        self.explainer = ExplanationGenerator()

    @property
    def threshold(self) -> float:
        return self.scorer.threshold

    def rank(
        self,
        self_vibe: Optional[str],
        candidates: List[Union[VibeProfile, Dict]],
        n: Optional[int] = None,
        query: Optional[str] = None,
        include_breakdown: bool = False
    ) -> MatchReport:
        """
        Rank candidates against the self vibe.

        Args:
            self_vibe: The local user's vibe text
            candidates: Profiles (or dicts) to rank
            n: Keep only the top n results
            query: Name/vibe search filter applied before scoring
            include_breakdown: Include score components in the output

        Returns:
            MatchReport with results best-first
        """
        profiles = [as_profile(c) for c in candidates]
        visible = filter_profiles(profiles, query)
        if query:
            logger.debug("Search %r kept %d of %d profiles", query, len(visible), len(profiles))

        scored = self.scorer.score_candidates(self_vibe, visible, return_breakdown=True)
        if n is not None:
            scored = scored[:max(n, 0)]

        results = []
        for sc in scored:
            results.append(MatchResult(
                profile=sc.profile,
                score=sc.score,
                matched=sc.matched,
                explanation=self.explainer.generate_explanation(sc),
                breakdown=sc.breakdown.to_dict() if include_breakdown and sc.breakdown else None,
            ))

        return MatchReport(
            self_vibe=self_vibe or "",
            threshold=self.threshold,
            candidate_count=len(visible),
            results=results,
        )


def rank_nearby(
    self_vibe: str,
    candidates: List[Union[VibeProfile, Dict]],
    n: Optional[int] = None
) -> Dict:
    """
    Convenience function for a quick ranking.

    Returns:
        Dictionary form of the MatchReport
    """
    return VibeMatcher().rank(self_vibe, candidates, n=n).to_dict()
