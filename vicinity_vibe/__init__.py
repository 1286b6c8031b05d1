"""
Vicinity Vibe - Nearby Vibe Matching
====================================

Scores the people nearby against your current vibe using keyword overlap
and proximity, ranks them best-first and decides who counts as a match.

Modules:
    - config: Configuration and constants
    - features: Profiles, tokenization and distance parsing
    - scoring: Vibe compatibility scoring engine
    - explainer: Explanation generation
    - matcher: Ranking orchestrator
    - swipe: Swipe deck state
    - roulette: Boredom roulette
    - cli: Command-line interface
"""

from .features import VibeProfile, tokenize, parse_distance
from .scoring import (
    ScoringEngine,
    ScoredCandidate,
    score_candidates,
    is_match,
    no_jitter,
)

__version__ = "1.0.0"
__author__ = "Vicinity Vibe Team"
