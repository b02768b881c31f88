"""
Interview state management.

Tracks the mutable record of one interview session: its status, the
question sequence, recorded responses and the final outcome.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID, uuid4

from timed_interview.orchestrator.errors import StateError
from timed_interview.orchestrator.schemas import (
    CandidateProfile,
    InterviewSession,
    Question,
    Response,
    SessionStatus,
)
from timed_interview.orchestrator.sequencer import QuestionSequencer


class InterviewState:
    """
    Manages the mutable state of an interview session.

    Only the orchestrator mutates this object; callers receive
    ``InterviewSession`` snapshots instead.
    """

    def __init__(self, candidate: CandidateProfile) -> None:
        """
        Initialize interview state.

        Args:
            candidate: Candidate profile information.
        """
        self._session_id: UUID = uuid4()
        self._candidate = candidate
        self._candidate_ref: str | None = None
        self._status = SessionStatus.NOT_STARTED
        self._sequencer: QuestionSequencer | None = None
        self._responses: list[Response] = []
        self._score: float | None = None
        self._summary: str | None = None
        self._error_kind: str | None = None
        self._transitions: list[tuple[SessionStatus, int]] = [(SessionStatus.NOT_STARTED, 0)]
        self._started_at: datetime = datetime.now(timezone.utc)
        self._completed_at: datetime | None = None

    @property
    def session_id(self) -> UUID:
        """Get the unique session identifier."""
        return self._session_id

    @property
    def candidate(self) -> CandidateProfile:
        """Get the candidate profile."""
        return self._candidate

    @property
    def candidate_ref(self) -> str | None:
        """Get the reference assigned by the persistence sink."""
        return self._candidate_ref

    @candidate_ref.setter
    def candidate_ref(self, value: str | None) -> None:
        self._candidate_ref = value

    @property
    def status(self) -> SessionStatus:
        """Get the current state machine status."""
        return self._status

    @property
    def current_index(self) -> int:
        """Get the index of the active (or next) question."""
        return self._sequencer.current_index if self._sequencer else 0

    @property
    def questions(self) -> list[Question]:
        """Get all questions in order."""
        return self._sequencer.questions if self._sequencer else []

    @property
    def total_questions(self) -> int:
        return self._sequencer.total if self._sequencer else 0

    @property
    def current_question(self) -> Question | None:
        """Get the active question, or None before generation and after the last one."""
        return self._sequencer.next() if self._sequencer else None

    @property
    def responses(self) -> list[Response]:
        """Get all recorded responses."""
        return self._responses.copy()

    @property
    def transitions(self) -> list[tuple[SessionStatus, int]]:
        """Get the (status, question index) history of the session."""
        return self._transitions.copy()

    @property
    def is_finished(self) -> bool:
        """Check if the session reached a terminal status."""
        return self._status.is_terminal

    def set_status(self, status: SessionStatus, question_index: int | None = None) -> None:
        """
        Move to a new status and record the transition.

        Args:
            status: The status being entered.
            question_index: Index to record; defaults to the current index.
        """
        self._status = status
        index = self.current_index if question_index is None else question_index
        self._transitions.append((status, index))

    def set_questions(self, questions: Sequence[Question]) -> None:
        """
        Install the generated question sequence.

        Raises:
            StateError: If questions were already set.
        """
        if self._sequencer is not None:
            raise StateError("Questions have already been generated", status=self._status)
        self._sequencer = QuestionSequencer(questions)

    def record_response(self, response: Response) -> None:
        """
        Append the response for the active question and advance past it.

        Args:
            response: Response for the question at the current index.

        Raises:
            StateError: If the response does not belong to the active question.
        """
        question = self.current_question
        if question is None or self._sequencer is None:
            raise StateError("No active question to record a response for", status=self._status)
        if response.question != question:
            raise StateError(
                "Response does not match the active question",
                status=self._status,
                question_index=self.current_index,
            )
        self._responses.append(response)
        self._sequencer.advance()

    def complete(self, score: float, summary: str) -> None:
        """
        Store the final outcome and mark the session completed.

        Args:
            score: Overall score (0-100).
            summary: Summary text.
        """
        self._score = score
        self._summary = summary
        self._completed_at = datetime.now(timezone.utc)
        self.set_status(SessionStatus.COMPLETED)

    def fail(self, error_kind: str) -> None:
        """Mark the session failed; recorded responses are kept."""
        self._error_kind = error_kind
        self._completed_at = datetime.now(timezone.utc)
        self.set_status(SessionStatus.FAILED)

    def snapshot(self) -> InterviewSession:
        """
        Build an immutable-by-convention copy of the session record.

        Returns:
            InterviewSession reflecting the current state.
        """
        return InterviewSession(
            id=self._session_id,
            candidate=self._candidate,
            candidate_ref=self._candidate_ref,
            status=self._status,
            current_index=self.current_index,
            questions=self.questions,
            responses=self.responses,
            score=self._score,
            summary=self._summary,
            error_kind=self._error_kind,
            started_at=self._started_at,
            completed_at=self._completed_at,
        )
