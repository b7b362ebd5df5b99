"""
Unit tests for answer option shuffling and grading.

Run: pytest tests/unit/test_grading.py -v
"""

import random

from adaptive_trainer.drill.drill_session import AnswerQuality
from adaptive_trainer.drill.grading import grade_choice, shuffle_options


class TestShuffleOptions:
    """Test shuffle_options."""

    def test_keys_and_qualities(self, make_scenario):
        options = shuffle_options(make_scenario("a"), random.Random(7))

        assert [o.key for o in options] == ["A", "B", "C"]
        assert {o.quality for o in options} == {
            AnswerQuality.BEST, AnswerQuality.OK, AnswerQuality.BAD,
        }

    def test_options_match_quality(self, make_scenario):
        scenario = make_scenario("a")
        for displayed in shuffle_options(scenario, random.Random(1)):
            assert displayed.option == getattr(scenario, displayed.quality.value)

    def test_seeded_order_is_repeatable(self, make_scenario):
        scenario = make_scenario("a")
        first = shuffle_options(scenario, random.Random(42))
        second = shuffle_options(scenario, random.Random(42))

        assert [o.quality for o in first] == [o.quality for o in second]


class TestGradeChoice:
    """Test grade_choice."""

    def test_in_time_uses_option_quality(self, make_scenario):
        for displayed in shuffle_options(make_scenario("a"), random.Random(3)):
            assert grade_choice(displayed, 4.2, 30.0) is displayed.quality

    def test_no_answer_is_timeout(self):
        assert grade_choice(None, 1.0) is AnswerQuality.TIMEOUT

    def test_late_answer_is_timeout(self, make_scenario):
        best = next(o for o in shuffle_options(make_scenario("a")) if o.quality is AnswerQuality.BEST)
        assert grade_choice(best, 30.5, 30.0) is AnswerQuality.TIMEOUT

    def test_answer_at_limit_counts(self, make_scenario):
        best = next(o for o in shuffle_options(make_scenario("a")) if o.quality is AnswerQuality.BEST)
        assert grade_choice(best, 30.0, 30.0) is AnswerQuality.BEST
