"""
Answer capture for the active question.

Keeps the candidate's draft and turns it into a Response when the answer
is submitted, either by the candidate or by the timer running out.
"""

from timed_interview.orchestrator.errors import AnswerValidationError, StateError
from timed_interview.orchestrator.schemas import NO_ANSWER_PLACEHOLDER, Question, Response


class AnswerCapture:
    """Draft holder bound to at most one active question."""

    def __init__(self) -> None:
        self._question: Question | None = None
        self._draft = ""

    @property
    def question(self) -> Question | None:
        """The question currently accepting an answer, if any."""
        return self._question

    @property
    def is_active(self) -> bool:
        return self._question is not None

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def has_usable_draft(self) -> bool:
        """A draft counts as usable once it has non-whitespace content."""
        return bool(self._draft.strip())

    def begin(self, question: Question) -> None:
        """Bind to a new question and discard any previous draft."""
        self._question = question
        self._draft = ""

    def update(self, text: str) -> None:
        """
        Replace the draft text.

        Raises:
            StateError: If no question is active.
        """
        if self._question is None:
            raise StateError("No active question to answer")
        self._draft = text

    def clear(self) -> None:
        """Unbind from the active question."""
        self._question = None
        self._draft = ""

    def submit(self, remaining: int, forced: bool = False) -> Response:
        """
        Snapshot the draft as an unscored Response.

        Args:
            remaining: Time units left on the countdown at submission.
            forced: True when triggered by timer expiry, which permits
                an empty draft.

        Returns:
            Response without score or feedback.

        Raises:
            StateError: If no question is active.
            AnswerValidationError: If a manual submission has no content.
        """
        if self._question is None:
            raise StateError("No active question to submit an answer for")

        question = self._question
        allotted = question.allotted_duration

        if self.has_usable_draft:
            answer_text = self._draft
            time_taken = min(max(allotted - remaining, 0), allotted)
        elif forced:
            answer_text = NO_ANSWER_PLACEHOLDER
            time_taken = allotted
        else:
            raise AnswerValidationError("Please provide an answer")

        return Response(
            question=question,
            answer_text=answer_text,
            difficulty=question.difficulty,
            time_taken_units=time_taken,
        )
