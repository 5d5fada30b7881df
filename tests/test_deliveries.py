"""
Tests for single-ball outcome simulation.

Run with: pytest tests/test_deliveries.py -v
"""

import random

import pytest
from powerplay.engine.deliveries import NOISE_RANGE, simulate_ball
from powerplay.engine.profile import BowlingType, PlayerRole, PlayerSkillProfile


class FixedNoise(random.Random):
    """Random source whose uniform() always returns the same value"""

    def __init__(self, noise: float, seed: int = 0):
        super().__init__(seed)
        self.noise = noise
        self.uniform_calls = []

    def uniform(self, a, b):
        self.uniform_calls.append((a, b))
        return self.noise


def create_profile(name: str, role: PlayerRole, **attrs) -> PlayerSkillProfile:
    return PlayerSkillProfile(name=name, role=role, **attrs)


# Both clamp to 100, so the advantage is zero and the noise alone decides
STRIKER = create_profile("Striker", PlayerRole.BATSMAN, skill_points=1000)
BOWLER = create_profile("Bowler", PlayerRole.BOWLER, skill_points=1000, bowling_type=BowlingType.FAST)


class TestOutcomeThresholds:
    """Outcome buckets at and around each threshold"""

    @pytest.mark.parametrize("noise,runs,boundary", [
        (4.9, 4, True),
        (4.0, 2, False),  # not above 4
        (6.0, 4, True),   # not above 6
        (6.5, 6, True),
    ])
    def test_scoring_buckets(self, noise, runs, boundary):
        outcome = simulate_ball(STRIKER, BOWLER, FixedNoise(noise, seed=3))
        if runs == 2:
            assert 1 <= outcome.runs <= 3
        else:
            assert outcome.runs == runs
        assert outcome.is_boundary is boundary
        assert not outcome.is_wicket

    def test_six_commentary(self):
        outcome = simulate_ball(STRIKER, BOWLER, FixedNoise(6.5))
        assert outcome.is_six
        assert outcome.commentary == "Striker hits it out of the park! SIX!"

    def test_four_commentary(self):
        outcome = simulate_ball(STRIKER, BOWLER, FixedNoise(5.0))
        assert outcome.is_four
        assert outcome.commentary == "Striker finds the gap! FOUR!"

    def test_running_between_wickets(self):
        rng = FixedNoise(3.0, seed=11)
        seen = {simulate_ball(STRIKER, BOWLER, rng).runs for _ in range(60)}
        assert seen == {1, 2, 3}

    def test_dot_ball_good_bowling(self):
        outcome = simulate_ball(STRIKER, BOWLER, FixedNoise(2.0))
        assert outcome.runs == 0
        assert not outcome.is_wicket
        assert outcome.commentary == "Dot ball. Good bowling by Bowler"

    def test_dot_ball_close_call(self):
        for noise in (0.0, -2.9):
            outcome = simulate_ball(STRIKER, BOWLER, FixedNoise(noise))
            assert outcome.runs == 0
            assert not outcome.is_wicket
            assert outcome.commentary == "Close call! Striker survives"

    def test_wicket_at_and_below_survival_threshold(self):
        for noise in (-3.0, -4.99):
            outcome = simulate_ball(STRIKER, BOWLER, FixedNoise(noise))
            assert outcome.is_wicket
            assert outcome.runs == 0
            assert outcome.commentary == "OUT! Striker is dismissed by Bowler"
            assert outcome.wicket_type in {"bowled", "caught", "lbw", "caught_behind", "run_out", "stumped"}

    def test_outcome_names_both_players(self):
        outcome = simulate_ball(STRIKER, BOWLER, FixedNoise(0.5))
        assert outcome.batter == "Striker"
        assert outcome.bowler == "Bowler"

    def test_noise_drawn_from_design_range(self):
        rng = FixedNoise(0.5)
        simulate_ball(STRIKER, BOWLER, rng)
        assert rng.uniform_calls == [NOISE_RANGE]
        assert NOISE_RANGE == (-5.0, 5.0)


class TestSkillAdvantage:
    """Relative ratings shift the outcome"""

    def test_weak_striker_against_strong_bowler_is_out(self):
        tailender = create_profile("Tail", PlayerRole.BOWLER, bowling_type=BowlingType.FAST)
        outcome = simulate_ball(tailender, BOWLER, FixedNoise(5.0))
        assert outcome.is_wicket

    def test_strong_striker_against_weak_bowler_hits_six(self):
        part_timer = create_profile("Part Timer", PlayerRole.BATSMAN)
        outcome = simulate_ball(STRIKER, part_timer, FixedNoise(-5.0))
        assert outcome.is_six


class TestDeterminism:
    """Same seed, same ball"""

    def test_seeded_generators_agree(self):
        striker = create_profile("Opener", PlayerRole.BATSMAN, batting_vs_spin=35, batting_vs_seam=35,
                                 fielding_skill=20, form=60, fitness=85, experience=60)
        bowler = create_profile("Quick", PlayerRole.BOWLER, bowling_skill=35, fielding_skill=20,
                                batting_vs_spin=10, batting_vs_seam=10, bowling_type=BowlingType.FAST,
                                pace=45, control=35, form=60, fitness=85, experience=60)

        first, second = random.Random(42), random.Random(42)
        balls_a = [simulate_ball(striker, bowler, first) for _ in range(120)]
        balls_b = [simulate_ball(striker, bowler, second) for _ in range(120)]
        assert balls_a == balls_b

    def test_runs_are_legal_values(self):
        rng = random.Random(7)
        for _ in range(500):
            outcome = simulate_ball(STRIKER, BOWLER, rng)
            assert outcome.runs in {0, 1, 2, 3, 4, 6}
            assert outcome.extras == 0
            if outcome.is_wicket:
                assert outcome.runs == 0
