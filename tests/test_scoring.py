"""Tests for the vibe compatibility scorer."""

import random

import pytest

from vicinity_vibe.config import ScoringWeights
from vicinity_vibe.features import VibeProfile
from vicinity_vibe.scoring import (
    ScoringEngine,
    score_candidates,
    is_match,
    no_jitter,
)


def _profile(vibe, distance="5mi", **kwargs):
    return VibeProfile(vibe=vibe, distance=distance, **kwargs)


class TestScoreBounds:
    """Scores always land in [0.10, 0.99]."""

    def test_random_inputs_stay_in_bounds(self, sample_profiles):
        rng = random.Random(1234)
        vibes = ["", "coffee", "Nightlife Coffee late-night", "art art art", "!!!", "live music rock"]

        for self_vibe in vibes:
            for _ in range(20):
                scored = score_candidates(self_vibe, sample_profiles, rng_fn=rng.random)
                assert all(0.10 <= sc.score <= 0.99 for sc in scored)

    def test_jitter_cannot_push_below_floor(self, fixed_rng):
        scored = score_candidates("coffee", [_profile("tea", "9mi")], rng_fn=fixed_rng(0.0))
        assert scored[0].score == pytest.approx(0.10)

    def test_jitter_cannot_push_above_ceiling(self, fixed_rng):
        scored = score_candidates("coffee", [_profile("coffee", "0mi")], rng_fn=fixed_rng(0.999999))
        assert scored[0].score == pytest.approx(0.99)

    def test_jitter_range(self, fixed_rng):
        # Raw 0.5 + 0.075 keeps clear of both bounds
        candidate = [_profile("anything", "1mi")]
        low = score_candidates("", candidate, rng_fn=fixed_rng(0.0))[0].score
        high = score_candidates("", candidate, rng_fn=fixed_rng(1.0))[0].score

        assert low == pytest.approx(0.575 - 0.025)
        assert high == pytest.approx(0.575 + 0.025)


class TestKeywordScore:
    """Keyword overlap component."""

    def test_full_overlap_close_by_clamps_to_ceiling(self):
        scored = score_candidates(
            "Nightlife Coffee",
            [_profile("Nightlife Coffee late-night", "0.2mi")],
            return_breakdown=True,
        )
        sc = scored[0]

        assert sc.breakdown.keyword_score == pytest.approx(0.9)
        assert sc.breakdown.proximity_bonus == pytest.approx(0.135)
        assert sc.breakdown.raw_score == pytest.approx(0.99)
        assert 0.965 <= sc.score <= 0.99
        assert sc.breakdown.matched_keywords == ["nightlife", "coffee"]

    def test_empty_self_vibe_is_neutral(self, sample_profiles, steady_engine):
        scored = steady_engine.score_candidates("", sample_profiles, return_breakdown=True)

        for sc in scored:
            assert sc.breakdown.keyword_score == 0.5
            assert sc.breakdown.neutral
            assert sc.score == pytest.approx(0.5 + sc.breakdown.proximity_bonus)

    def test_no_overlap_scores_zero_keywords(self, steady_engine):
        scored = steady_engine.score_candidates("coffee jazz", [_profile("yoga flow")], return_breakdown=True)

        assert scored[0].breakdown.keyword_score == 0.0
        assert scored[0].breakdown.matched_keywords == []
        assert scored[0].score == pytest.approx(0.10)

    def test_partial_overlap(self, steady_engine):
        scored = steady_engine.score_candidates("coffee jazz", [_profile("jazz club")], return_breakdown=True)
        assert scored[0].breakdown.keyword_score == pytest.approx(0.5 * 0.7 + 0.2)

    def test_repeated_self_tokens_count_by_membership(self, steady_engine):
        scored = steady_engine.score_candidates(
            "coffee coffee jazz", [_profile("coffee")], return_breakdown=True
        )
        breakdown = scored[0].breakdown

        assert breakdown.keyword_score == pytest.approx((2 / 3) * 0.7 + 0.2)
        assert breakdown.matched_keywords == ["coffee"]


class TestProximityBonus:
    """Distance component."""

    @pytest.mark.parametrize("distance,bonus", [
        ("0mi", 0.15),
        ("0.2mi", 0.135),
        ("1.0mi", 0.075),
        ("2mi", 0.0),
        ("10mi", 0.0),
    ])
    def test_linear_falloff(self, steady_engine, distance, bonus):
        scored = steady_engine.score_candidates("", [_profile("x", distance)], return_breakdown=True)
        assert scored[0].breakdown.proximity_bonus == pytest.approx(bonus)

    def test_unknown_distance_behaves_like_one_mile(self, steady_engine):
        unknown = steady_engine.score_candidates("coffee", [_profile("coffee", "unknown")], return_breakdown=True)
        one_mile = steady_engine.score_candidates("coffee", [_profile("coffee", "1.0mi")], return_breakdown=True)

        assert unknown[0].breakdown.proximity_bonus == pytest.approx(0.075)
        assert unknown[0].score == one_mile[0].score


class TestRanking:
    """Ordering and determinism."""

    def test_higher_score_ranks_first(self, steady_engine):
        weak = _profile("tea ceremony", "1.2mi", id="weak")
        strong = _profile("coffee", "5mi", id="strong")

        scored = steady_engine.score_candidates("coffee", [weak, strong])

        assert [sc.profile.id for sc in scored] == ["strong", "weak"]
        assert scored[0].score == pytest.approx(0.9)
        assert scored[1].score == pytest.approx(0.10)

    def test_sorted_descending(self, sample_profiles):
        scored = score_candidates("live music nightlife", sample_profiles)
        scores = [sc.score for sc in scored]
        assert scores == sorted(scores, reverse=True)

    def test_no_jitter_is_reproducible(self, sample_profiles):
        first = score_candidates("Park Hangout", sample_profiles, rng_fn=no_jitter)
        second = score_candidates("Park Hangout", sample_profiles, rng_fn=no_jitter)

        assert [sc.score for sc in first] == [sc.score for sc in second]

    def test_seeded_rng_is_reproducible(self, sample_profiles):
        first = score_candidates("coffee", sample_profiles, rng_fn=random.Random(42).random)
        second = score_candidates("coffee", sample_profiles, rng_fn=random.Random(42).random)

        assert [(sc.profile.id, sc.score) for sc in first] == [(sc.profile.id, sc.score) for sc in second]

    def test_zero_spread_weights_disable_jitter(self, sample_profiles):
        engine = ScoringEngine(ScoringWeights(jitter_spread=0.0))
        steady = ScoringEngine(rng_fn=no_jitter)

        assert [sc.score for sc in engine.score_candidates("coffee", sample_profiles)] == \
            [sc.score for sc in steady.score_candidates("coffee", sample_profiles)]

    def test_empty_candidate_list(self):
        assert score_candidates("coffee", []) == []

    def test_accepts_dicts_and_keeps_identity(self, sample_dicts):
        scored = score_candidates("Art Gallery", sample_dicts, rng_fn=no_jitter)

        assert scored[0].name == "Zoe 🎨"
        assert scored[0].profile.id == "5"
        assert scored[0].vibe == "Art Gallery Creative museums"

    def test_breakdown_only_on_request(self, sample_profiles):
        assert all(sc.breakdown is None for sc in score_candidates("coffee", sample_profiles))


class TestMatchDecision:
    """Threshold gating."""

    def test_strict_threshold(self):
        assert is_match(0.66)
        assert not is_match(0.65)
        assert not is_match(0.10)

    def test_custom_threshold(self):
        assert is_match(0.71, threshold=0.7)
        assert not is_match(0.7, threshold=0.7)

    def test_matched_flag_uses_engine_threshold(self, steady_engine):
        candidates = [_profile("coffee", "5mi", id="a"), _profile("tea", "5mi", id="b")]

        default = {sc.profile.id: sc.matched for sc in steady_engine.score_candidates("coffee", candidates)}
        strict = {
            sc.profile.id: sc.matched
            for sc in score_candidates("coffee", candidates, threshold=0.95, rng_fn=no_jitter)
        }

        assert default == {"a": True, "b": False}
        assert strict == {"a": False, "b": False}
