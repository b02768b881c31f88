"""
Question sequencing.

Holds the ordered questions for a session and the index of the one
currently being asked.
"""

from collections.abc import Sequence

from timed_interview.orchestrator.errors import StateError
from timed_interview.orchestrator.schemas import Question


class QuestionSequencer:
    """Ordered, forward-only cursor over a session's questions."""

    def __init__(self, questions: Sequence[Question]) -> None:
        """
        Initialize the sequencer.

        Args:
            questions: Questions in the order they will be asked.

        Raises:
            ValueError: If no questions are given.
            TypeError: If an item is not a Question.
        """
        if not questions:
            raise ValueError("at least one question is required")
        for question in questions:
            if not isinstance(question, Question):
                raise TypeError(f"expected Question, got {type(question).__name__}")
        self._questions: tuple[Question, ...] = tuple(questions)
        self._current_index = 0

    @property
    def questions(self) -> list[Question]:
        """Get all questions in order."""
        return list(self._questions)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def is_exhausted(self) -> bool:
        """Check if every question has been advanced past."""
        return self._current_index >= len(self._questions)

    def next(self) -> Question | None:
        """
        Get the question at the current index.

        Returns:
            The current question, or None once exhausted.
        """
        if self.is_exhausted:
            return None
        return self._questions[self._current_index]

    def advance(self) -> int:
        """
        Move to the following question.

        Returns:
            The new current index.

        Raises:
            StateError: If the sequence is already exhausted.
        """
        if self.is_exhausted:
            raise StateError(
                "No questions left to advance past",
                question_index=self._current_index,
            )
        self._current_index += 1
        return self._current_index
