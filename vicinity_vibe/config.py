"""
Configuration and constants for the Vicinity Vibe matching engine.
"""
import os
import logging
from dataclasses import dataclass
from typing import List, Dict

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to the default."""
    raw = os.environ.get(name, "")
    if not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


# =============================================================================
# TOKENIZATION
# =============================================================================
# Characters stripped from vibe text before splitting on whitespace
VIBE_PUNCTUATION = ".,/#!$%^&*;:{}=-_`~()"

# Tokens this short or shorter are dropped ("a", "at", "&", ...)
MIN_TOKEN_LENGTH = 2

# Distance used when a candidate's distance cannot be parsed
DEFAULT_DISTANCE_MILES = 1.0

# =============================================================================
# SCORING WEIGHTS
# =============================================================================
@dataclass
class ScoringWeights:
    """Weights and bounds for the vibe compatibility score."""
    # Keyword overlap
    keyword_weight: float = 0.7
    overlap_bonus: float = 0.2       # Flat bonus when any keyword is shared
    neutral_keyword_score: float = 0.5  # Self has not declared a vibe

    # Proximity: linear falloff to zero at proximity_radius_miles
    proximity_max_bonus: float = 0.15
    proximity_radius_miles: float = 2.0

    # Random perturbation, centred on zero (+/- spread / 2)
    jitter_spread: float = 0.05

    # Clamp bounds
    score_floor: float = 0.10
    score_ceiling: float = 0.99

    def to_dict(self) -> Dict[str, float]:
        return {
            "keyword_weight": self.keyword_weight,
            "overlap_bonus": self.overlap_bonus,
            "neutral_keyword_score": self.neutral_keyword_score,
            "proximity_max_bonus": self.proximity_max_bonus,
            "proximity_radius_miles": self.proximity_radius_miles,
            "jitter_spread": self.jitter_spread,
            "score_floor": self.score_floor,
            "score_ceiling": self.score_ceiling,
        }

DEFAULT_WEIGHTS = ScoringWeights()

# =============================================================================
# MATCH DECISION
# =============================================================================
# A candidate matches when its score is strictly above this value
MATCH_THRESHOLD = _env_float("VICINITY_VIBE_MATCH_THRESHOLD", 0.65)

# Gate used by the older word-count scorer
LEGACY_MATCH_THRESHOLD = 0.7

# Score tiers for display (checked in order, strict lower bound)
SCORE_TIERS = [
    ("strong", 0.8),
    ("moderate", 0.5),
]
DEFAULT_TIER = "weak"

# Number of dots in the signal indicator
MAX_SIGNAL_STRENGTH = 3

# =============================================================================
# OUTPUT CONFIGURATION
# =============================================================================
OUTPUT_FORMAT = "json"  # json, csv or simple
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# =============================================================================
# ROULETTE
# =============================================================================
ROULETTE_OPTIONS: List[str] = [
    "Nightlife @BarVV",
    "Live Music nearby",
    "Trivia Night",
    "Food Trucks",
    "Park Hangout",
    "Arcade Games",
    "Yoga Flow",
    "Coffee & Chat",
]

# =============================================================================
# MOCK ROSTER (people nearby)
# =============================================================================
SAMPLE_PROFILES: List[Dict] = [
    {"id": "1", "name": "Alex 🌙", "vibe": "Nightlife Coffee ☕ late-night", "distance": "0.2mi", "verified": True},
    {"id": "2", "name": "Jamie 🎸", "vibe": "Live Music Rock concerts indie", "distance": "0.5mi", "verified": True},
    {"id": "3", "name": "Sam 🌳", "vibe": "Park Hangout Chill nature walking", "distance": "0.1mi", "verified": True},
    {"id": "4", "name": "Taylor 🍻", "vibe": "Happy Hour Beer social pub-crawl", "distance": "0.9mi", "verified": False},
    {"id": "5", "name": "Zoe 🎨", "vibe": "Art Gallery Creative museums", "distance": "1.2mi", "verified": True},
]
