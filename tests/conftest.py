"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import List, Dict

from vicinity_vibe.config import SAMPLE_PROFILES
from vicinity_vibe.features import VibeProfile
from vicinity_vibe.scoring import ScoringEngine, no_jitter


@pytest.fixture
def sample_dicts() -> List[Dict]:
    """The mock roster as plain dicts."""
    return [dict(p) for p in SAMPLE_PROFILES]


@pytest.fixture
def sample_profiles(sample_dicts) -> List[VibeProfile]:
    """The mock roster as VibeProfile instances."""
    return [VibeProfile.from_dict(p) for p in sample_dicts]


@pytest.fixture
def steady_engine() -> ScoringEngine:
    """Engine with jitter disabled."""
    return ScoringEngine(rng_fn=no_jitter)


@pytest.fixture
def fixed_rng():
    """Factory for a randomness source that always returns the same value."""
    def make(value: float):
        return lambda: value
    return make
