"""
Feature Extraction Module
=========================

Turns raw profile data into the pieces the scorer works with:

    1. Vibe tokens (lower-cased, punctuation-stripped keywords)
    2. Distance in miles (parsed from strings like "0.2mi")
    3. Profile records (dicts or JSON files -> VibeProfile)
"""

import json
import math
import re
import logging
from pathlib import Path
from typing import List, Dict, Optional, Any, Union
from dataclasses import dataclass, field

from .config import (
    VIBE_PUNCTUATION,
    MIN_TOKEN_LENGTH,
    DEFAULT_DISTANCE_MILES,
)

logger = logging.getLogger(__name__)

_PUNCTUATION_RE = re.compile("[" + re.escape(VIBE_PUNCTUATION) + "]")

# Leading numeric prefix, the same way a lenient float parser reads "1.5 miles"
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_PROFILE_FIELDS = ("id", "name", "vibe", "distance", "verified", "avatar", "story")


def _as_flag(value: Any) -> bool:
    """Read a boolean field; strings only count when they say "true"."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


@dataclass
class VibeProfile:
    """A person nearby (or the local user) and what they're into right now."""
    vibe: str = ""
    distance: Union[str, float, None] = None

    # Identity / display fields, never used for scoring
    id: Optional[str] = None
    name: Optional[str] = None
    verified: bool = False
    avatar: Optional[str] = None
    story: bool = False

    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def distance_miles(self) -> float:
        return parse_distance(self.distance)

    @property
    def tokens(self) -> List[str]:
        return tokenize(self.vibe)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VibeProfile":
        """Build a profile from a loose dict, keeping unknown keys in `extra`."""
        extra = {k: v for k, v in data.items() if k not in _PROFILE_FIELDS}
        profile_id = data.get("id")
        name = data.get("name")
        return cls(
            vibe=str(data.get("vibe") or ""),
            distance=data.get("distance"),
            id=str(profile_id) if profile_id is not None else None,
            name=str(name) if name is not None else None,
            verified=_as_flag(data.get("verified")),
            avatar=data.get("avatar"),
            story=_as_flag(data.get("story")),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "vibe": self.vibe,
            "distance": self.distance,
            "verified": self.verified,
        }
        if self.avatar:
            data["avatar"] = self.avatar
        if self.story:
            data["story"] = self.story
        data.update(self.extra)
        return data


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split vibe text into keywords.

    Lower-cases, strips the fixed punctuation set, splits on whitespace
    and drops tokens of MIN_TOKEN_LENGTH characters or fewer. Order and
    duplicates are preserved.

    Args:
        text: Free-form vibe text (None is treated as empty)

    Returns:
        List of keyword tokens
    """
    if not text:
        return []

    cleaned = _PUNCTUATION_RE.sub("", text.lower())
    return [word for word in cleaned.split() if len(word) > MIN_TOKEN_LENGTH]


def parse_distance(value: Union[str, float, int, None]) -> float:
    """
    Parse a distance like "0.2mi" into miles.

    Anything that doesn't yield a finite, non-negative number falls
    back to DEFAULT_DISTANCE_MILES.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_DISTANCE_MILES

    if isinstance(value, (int, float)):
        miles = float(value)
    else:
        text = str(value).strip().lower().replace("mi", "", 1).strip()
        match = _NUMBER_PREFIX_RE.match(text)
        if not match:
            return DEFAULT_DISTANCE_MILES
        miles = float(match.group(0))

    if not math.isfinite(miles) or miles < 0:
        return DEFAULT_DISTANCE_MILES

    return miles


def as_profile(candidate: Union[VibeProfile, Dict[str, Any]]) -> VibeProfile:
    """Accept either a VibeProfile or a plain dict."""
    if isinstance(candidate, VibeProfile):
        return candidate
    return VibeProfile.from_dict(candidate)


def load_profiles(path: Union[str, Path]) -> List[VibeProfile]:
    """
    Load candidate profiles from a JSON file.

    The file must contain a JSON array of objects. OSError and
    json.JSONDecodeError propagate to the caller.

    Raises:
        ValueError: If the document isn't a list of objects
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of profiles")

    profiles = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: entry {i} is not an object")
        profiles.append(VibeProfile.from_dict(item))

    logger.debug("Loaded %d profiles from %s", len(profiles), path)
    return profiles


def filter_profiles(
    profiles: List[VibeProfile],
    query: Optional[str]
) -> List[VibeProfile]:
    """
    Keep profiles whose name or vibe contains the query (case-insensitive).

    A blank query keeps everything.
    """
    if not query or not query.strip():
        return list(profiles)

    needle = query.lower()
    return [
        p for p in profiles
        if needle in (p.name or "").lower() or needle in (p.vibe or "").lower()
    ]
