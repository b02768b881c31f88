"""
Exceptions raised by the interview orchestrator.

Every error carries the session status and question index current when it
was raised, so callers can decide between retrying a step and restarting
the whole session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timed_interview.orchestrator.schemas import InterviewSession, SessionStatus


class InterviewError(Exception):
    """Base class for orchestrator errors."""

    def __init__(
        self,
        message: str,
        status: SessionStatus | None = None,
        question_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.question_index = question_index

    @property
    def kind(self) -> str:
        """Name of the error kind reported to the controlling UI."""
        return type(self).__name__


class AnswerValidationError(InterviewError):
    """Manual submission with an empty answer. The candidate should be re-prompted."""


class BusyError(InterviewError):
    """A collaborator call is outstanding; the caller should wait and try again."""


class StateError(InterviewError):
    """Operation is not valid in the current session state."""


class CollaboratorError(InterviewError):
    """An external call failed and the session moved to FAILED."""

    def __init__(
        self,
        message: str,
        status: SessionStatus | None = None,
        question_index: int | None = None,
        snapshot: InterviewSession | None = None,
    ) -> None:
        super().__init__(message, status=status, question_index=question_index)
        self.snapshot = snapshot


class GenerationFailed(CollaboratorError):
    """The question generator failed or returned no questions."""


class EvaluationFailed(CollaboratorError):
    """The answer evaluator failed."""


class SummaryFailed(CollaboratorError):
    """The summarizer failed."""


class PersistenceFailed(CollaboratorError):
    """The persistence sink rejected a write."""
