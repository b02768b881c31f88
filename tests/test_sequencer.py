"""
Tests for question sequencing and difficulty time budgets.
"""

import pytest

from timed_interview.orchestrator import Difficulty, Question, QuestionSequencer, StateError, duration_for
from timed_interview.orchestrator.schemas import ScoreBand, score_band


class TestDurations:
    """Tests for the difficulty to duration mapping."""

    @pytest.mark.parametrize(
        ("difficulty", "expected"),
        [(Difficulty.EASY, 20), (Difficulty.MEDIUM, 60), (Difficulty.HARD, 120)],
    )
    def test_duration_for(self, difficulty: Difficulty, expected: int) -> None:
        assert duration_for(difficulty) == expected
        assert duration_for(difficulty.value) == expected
        assert Question(text="Q", difficulty=difficulty).allotted_duration == expected

    def test_duration_is_stable(self) -> None:
        assert {duration_for(Difficulty.MEDIUM) for _ in range(5)} == {60}

    def test_unknown_difficulty(self) -> None:
        with pytest.raises(ValueError):
            duration_for("expert")

    def test_question_rejects_unknown_difficulty(self) -> None:
        with pytest.raises(ValueError):
            Question(text="Q", difficulty="expert")


class TestQuestionSequencer:
    """Tests for QuestionSequencer class."""

    @pytest.fixture
    def questions(self) -> list[Question]:
        return [
            Question(text="Warm-up question", difficulty=Difficulty.EASY),
            Question(text="Design question", difficulty=Difficulty.HARD),
        ]

    def test_walks_questions_in_order(self, questions: list[Question]) -> None:
        sequencer = QuestionSequencer(questions)

        assert sequencer.total == 2
        assert sequencer.next() == questions[0]
        assert sequencer.advance() == 1
        assert sequencer.next() == questions[1]
        assert sequencer.advance() == 2
        assert sequencer.is_exhausted
        assert sequencer.next() is None

    def test_advance_past_end(self, questions: list[Question]) -> None:
        sequencer = QuestionSequencer(questions)
        sequencer.advance()
        sequencer.advance()

        with pytest.raises(StateError):
            sequencer.advance()
        assert sequencer.current_index == 2

    def test_questions_are_copied(self, questions: list[Question]) -> None:
        sequencer = QuestionSequencer(questions)
        questions.clear()

        assert sequencer.total == 2
        sequencer.questions.clear()
        assert sequencer.total == 2

    def test_empty_sequence(self) -> None:
        with pytest.raises(ValueError):
            QuestionSequencer([])

    def test_rejects_non_questions(self) -> None:
        with pytest.raises(TypeError):
            QuestionSequencer(["What is Python?"])  # type: ignore[list-item]


class TestScoreBand:
    @pytest.mark.parametrize(
        ("score", "band"),
        [
            (None, ScoreBand.UNSCORED),
            (95.0, ScoreBand.STRONG),
            (80.0, ScoreBand.STRONG),
            (60.0, ScoreBand.MODERATE),
            (59.5, ScoreBand.WEAK),
            (0.0, ScoreBand.WEAK),
        ],
    )
    def test_score_band(self, score: float | None, band: ScoreBand) -> None:
        assert score_band(score) == band
