"""
Interview orchestrator.

Drives one timed interview session: generates questions, presents them
with a countdown, accepts manual or timed-out answers, sends them for
evaluation and finally requests the session summary.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from timed_interview.collaborators import (
    AnswerEvaluatorBase,
    CandidateRecord,
    EvaluationRequest,
    FinalUpdate,
    FunctionsAnswerEvaluator,
    FunctionsClient,
    FunctionsQuestionGenerator,
    FunctionsSummarizer,
    PersistenceSinkBase,
    QuestionGeneratorBase,
    QuestionRequest,
    ResponseRecord,
    SummarizerBase,
    SummaryItem,
    SummaryRequest,
)
from timed_interview.config import get_settings
from timed_interview.orchestrator.answer_capture import AnswerCapture
from timed_interview.orchestrator.errors import (
    AnswerValidationError,
    BusyError,
    CollaboratorError,
    EvaluationFailed,
    GenerationFailed,
    PersistenceFailed,
    StateError,
    SummaryFailed,
)
from timed_interview.orchestrator.interview_state import InterviewState
from timed_interview.orchestrator.schemas import (
    NO_ANSWER_PLACEHOLDER,
    CandidateProfile,
    InterviewSession,
    Message,
    Response,
    SessionStatus,
    TimerState,
)
from timed_interview.orchestrator.timer import CountdownTimer, TickCallback
from timed_interview.orchestrator.transcript import MessageLog

T = TypeVar("T")


class InterviewOrchestrator:
    """
    State machine for a single timed interview session.

    At most one transition is in flight at a time. Collaborator calls are
    the only suspension points; while one is outstanding, answer
    submissions are rejected with ``BusyError`` rather than queued.
    """

    def __init__(
        self,
        candidate: CandidateProfile,
        question_generator: QuestionGeneratorBase | None = None,
        evaluator: AnswerEvaluatorBase | None = None,
        summarizer: SummarizerBase | None = None,
        sink: PersistenceSinkBase | None = None,
        tick_interval: float | None = None,
        manual_clock: bool = False,
        expected_question_count: int | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            candidate: Candidate being interviewed.
            question_generator: Question source. Uses the functions service if None.
            evaluator: Answer evaluator. Uses the functions service if None.
            summarizer: Session summarizer. Uses the functions service if None.
            sink: Write-only results store. Nothing is persisted if None.
            tick_interval: Seconds per time unit (uses config if not provided).
            manual_clock: If True the timer never ticks on its own; the owner
                calls ``timer.tick()``.
            expected_question_count: Count announced in the welcome message
                (uses config if not provided).
        """
        settings = get_settings()
        self._logger = logging.getLogger(__name__)

        self._functions_client: FunctionsClient | None = None
        if question_generator is None or evaluator is None or summarizer is None:
            self._functions_client = FunctionsClient()
        self._question_generator = question_generator or FunctionsQuestionGenerator(self._functions_client)
        self._evaluator = evaluator or FunctionsAnswerEvaluator(self._functions_client)
        self._summarizer = summarizer or FunctionsSummarizer(self._functions_client)
        self._sink = sink

        self._expected_question_count = expected_question_count or settings.expected_question_count

        self._state = InterviewState(candidate=candidate)
        self._transcript = MessageLog()
        self._capture = AnswerCapture()
        self._timer = CountdownTimer(
            tick_interval=None if manual_clock else (tick_interval or settings.tick_seconds),
            on_tick=self._on_tick,
            on_expired=self._on_timer_expired,
        )
        self._tick_listeners: list[TickCallback] = []

        self._busy = False
        self._discarded = False
        self._expiry_task: asyncio.Task[None] | None = None
        self._error: CollaboratorError | None = None

    @property
    def state(self) -> InterviewState:
        """Get the live interview state."""
        return self._state

    @property
    def session(self) -> InterviewSession:
        """Get a snapshot of the session record."""
        return self._state.snapshot()

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def transcript(self) -> MessageLog:
        """Get the transcript, e.g. to subscribe to new messages."""
        return self._transcript

    @property
    def messages(self) -> list[Message]:
        return self._transcript.messages

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    @property
    def timer_state(self) -> TimerState:
        return self._timer.state

    @property
    def draft(self) -> str:
        """Get the candidate's in-progress answer."""
        return self._capture.draft

    @property
    def is_busy(self) -> bool:
        """Check if a collaborator call is outstanding."""
        return self._busy

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    @property
    def is_discarded(self) -> bool:
        """Check if the session was abandoned."""
        return self._discarded

    @property
    def error(self) -> CollaboratorError | None:
        """Get the failure that moved the session to FAILED, if any."""
        return self._error

    def add_tick_listener(self, listener: TickCallback) -> None:
        """Register a callback invoked with the timer state on every tick."""
        self._tick_listeners.append(listener)

    async def start(self) -> InterviewSession:
        """
        Start the session: register the candidate, generate questions and
        present the first one.

        Returns:
            Snapshot of the session, awaiting the first answer.

        Raises:
            StateError: If the session was already started.
            GenerationFailed: If question generation fails or returns nothing.
            PersistenceFailed: If the candidate record cannot be created.
        """
        self._ensure_open()
        if self._busy:
            raise self._busy_error()
        if self._state.status != SessionStatus.NOT_STARTED:
            raise StateError("Session has already been started", status=self._state.status)

        candidate = self._state.candidate
        self._logger.info(f"Starting interview for candidate: {candidate.name}")
        self._transcript.system(
            f"Welcome {candidate.name}! Let's begin your interview. "
            f"I'll ask you {self._expected_question_count} questions. Ready?"
        )
        self._set_status(SessionStatus.GENERATING_QUESTIONS)

        if self._sink is not None:
            candidate_ref = await self._call(
                PersistenceFailed,
                "Candidate registration",
                self._sink.register_candidate(
                    CandidateRecord(name=candidate.name, email=candidate.email, phone=candidate.phone)
                ),
            )
            if self._discarded:
                return self._state.snapshot()
            self._state.candidate_ref = candidate_ref

        generated = await self._call(
            GenerationFailed,
            "Question generation",
            self._question_generator.generate(
                QuestionRequest(candidate_name=candidate.name, resume_text=candidate.resume_text)
            ),
        )
        if self._discarded:
            return self._state.snapshot()

        if not generated:
            raise self._fail(GenerationFailed, "Question generator returned no questions")

        self._state.set_questions([item.to_question() for item in generated])
        self._logger.info(f"Interview {self._state.session_id}: {self._state.total_questions} questions ready")

        self._present()
        return self._state.snapshot()

    def update_draft(self, text: str) -> None:
        """
        Replace the in-progress answer for the active question.

        Raises:
            StateError: If no question is awaiting an answer.
            BusyError: If a collaborator call is outstanding.
        """
        self._ensure_answerable()
        self._capture.update(text)

    async def submit(self, text: str | None = None, question_index: int | None = None) -> InterviewSession:
        """
        Submit the candidate's answer for the active question.

        Args:
            text: Answer text. The current draft is used if None.
            question_index: Index the caller believes is active; a stale
                index is rejected instead of answering the next question.

        Returns:
            Snapshot of the session after the answer was recorded.

        Raises:
            AnswerValidationError: If the answer is empty. Nothing changes.
            BusyError: If a collaborator call is outstanding.
            StateError: If no question is awaiting an answer.
            EvaluationFailed: If the evaluator fails.
        """
        self._ensure_answerable(question_index)

        answer = self._capture.draft if text is None else text
        if not answer.strip():
            raise AnswerValidationError(
                "Please provide an answer",
                status=self._state.status,
                question_index=self._state.current_index,
            )
        if text is not None:
            self._capture.update(text)

        remaining = self._timer.remaining
        self._timer.stop()
        response = self._capture.submit(remaining)
        await self._evaluate(response)
        return self._state.snapshot()

    async def handle_timeout(self) -> InterviewSession:
        """
        Treat the active question as timed out.

        Called automatically when the timer expires; external drivers may
        call it directly.

        Returns:
            Snapshot of the session after the timeout was processed.
        """
        self._ensure_answerable()
        await self._apply_timeout()
        return self._state.snapshot()

    async def settle(self) -> None:
        """Wait for any scheduled timer-expiry handling to finish."""
        while self._expiry_task is not None:
            task = self._expiry_task
            await task
            if self._expiry_task is task:
                self._expiry_task = None

    def abandon(self) -> None:
        """
        Drop the session: stop the timer and ignore any late collaborator results.

        In-flight collaborator calls are not cancelled.
        """
        if self._discarded:
            return
        self._discarded = True
        self._timer.reset()
        self._capture.clear()
        self._logger.info(f"Interview {self._state.session_id} abandoned in status {self._state.status.value}")

    async def close(self) -> None:
        """Release the HTTP client created for default collaborators."""
        if self._functions_client is not None:
            await self._functions_client.close()

    def _present(self) -> None:
        question = self._state.current_question
        assert question is not None
        self._set_status(SessionStatus.PRESENTING)

        index = self._state.current_index
        total = self._state.total_questions
        self._transcript.system(f"Question {index + 1}/{total} ({question.difficulty.value}): {question.text}")
        self._capture.begin(question)
        self._timer.start(question.allotted_duration)
        self._set_status(SessionStatus.AWAITING_ANSWER)

    async def _apply_timeout(self) -> None:
        remaining = self._timer.remaining
        self._timer.stop()

        if self._capture.has_usable_draft:
            self._logger.info(f"Time's up on question {self._state.current_index + 1}; submitting draft")
            await self._evaluate(self._capture.submit(remaining, forced=True))
            return

        response = self._capture.submit(remaining, forced=True)
        await self._persist(response)
        if self._discarded:
            return
        self._transcript.system("Time's up! Moving to next question.")
        self._transcript.candidate(NO_ANSWER_PLACEHOLDER)
        await self._commit(response)

    async def _evaluate(self, response: Response) -> None:
        self._transcript.candidate(response.answer_text)
        self._set_status(SessionStatus.EVALUATING)

        result = await self._call(
            EvaluationFailed,
            "Answer evaluation",
            self._evaluator.evaluate(EvaluationRequest.from_response(response)),
        )
        if self._discarded:
            return

        scored = response.model_copy(update={"score": result.score, "feedback": result.feedback})
        await self._persist(scored)
        if self._discarded:
            return

        if result.feedback:
            self._transcript.system(result.feedback)
        await self._commit(scored)

    async def _persist(self, response: Response) -> None:
        candidate_ref = self._state.candidate_ref
        if self._sink is None or candidate_ref is None:
            return
        await self._call(
            PersistenceFailed,
            "Saving response",
            self._sink.record_response(ResponseRecord.from_response(candidate_ref, response)),
        )

    async def _commit(self, response: Response) -> None:
        index = self._state.current_index
        self._state.record_response(response)
        self._capture.clear()
        self._timer.reset()
        self._set_status(SessionStatus.RECORDED, question_index=index)

        if self._state.current_question is not None:
            self._present()
        else:
            await self._summarize()

    async def _summarize(self) -> None:
        self._set_status(SessionStatus.SUMMARIZING)
        request = SummaryRequest(
            candidate_name=self._state.candidate.name,
            responses=[SummaryItem.from_response(r) for r in self._state.responses],
        )
        result = await self._call(SummaryFailed, "Summary generation", self._summarizer.summarize(request))
        if self._discarded:
            return

        candidate_ref = self._state.candidate_ref
        if self._sink is not None and candidate_ref is not None:
            await self._call(
                PersistenceFailed,
                "Saving final result",
                self._sink.finalize(
                    FinalUpdate(session_ref=candidate_ref, score=result.score, summary=result.summary)
                ),
            )
            if self._discarded:
                return

        self._transcript.system(
            f"Thank you for completing the interview! Your score: {result.score:g}/100\n\n{result.summary}"
        )
        self._state.complete(score=result.score, summary=result.summary)
        self._logger.info(f"Interview {self._state.session_id} completed with score {result.score:g}")

    async def _call(
        self,
        error_cls: type[CollaboratorError],
        what: str,
        call: Awaitable[T],
    ) -> T:
        """
        Await a collaborator call with the session marked busy.

        A failure moves the session to FAILED and raises ``error_cls``.
        If the session was abandoned meanwhile, results and failures are
        ignored; callers check ``self._discarded`` afterwards.
        """
        self._busy = True
        try:
            result = await call
        except Exception as e:
            if self._discarded:
                self._logger.debug(f"Ignoring {what} failure for abandoned session: {e}")
                return None  # type: ignore[return-value]
            self._logger.error(f"{what} failed: {e}")
            raise self._fail(error_cls, f"{what} failed: {e}") from e
        finally:
            self._busy = False

        if self._discarded:
            self._logger.debug(f"Ignoring late {what} result for abandoned session")
        return result

    def _fail(self, error_cls: type[CollaboratorError], message: str) -> CollaboratorError:
        status = self._state.status
        index = self._state.current_index
        self._timer.reset()
        self._capture.clear()
        self._state.fail(error_cls.__name__)
        error = error_cls(message, status=status, question_index=index, snapshot=self._state.snapshot())
        self._error = error
        return error

    def _set_status(self, status: SessionStatus, question_index: int | None = None) -> None:
        self._state.set_status(status, question_index=question_index)
        index = self._state.current_index if question_index is None else question_index
        self._logger.debug(f"Interview {self._state.session_id}: -> {status.value} ({index})")

    def _ensure_open(self) -> None:
        if self._discarded:
            raise StateError("Session has been abandoned", status=self._state.status)
        if self._state.is_finished:
            raise StateError(
                "Session already finished",
                status=self._state.status,
                question_index=self._state.current_index,
            )

    def _busy_error(self) -> BusyError:
        return BusyError(
            "Waiting for a collaborator response",
            status=self._state.status,
            question_index=self._state.current_index,
        )

    def _ensure_answerable(self, question_index: int | None = None) -> None:
        self._ensure_open()
        if self._busy:
            raise self._busy_error()
        status = self._state.status
        if status != SessionStatus.AWAITING_ANSWER:
            raise StateError(
                f"No question is awaiting an answer (status: {status.value})",
                status=status,
                question_index=self._state.current_index,
            )
        if question_index is not None and question_index != self._state.current_index:
            raise StateError(
                f"Question {question_index} is no longer active",
                status=status,
                question_index=self._state.current_index,
            )

    def _on_tick(self, timer_state: TimerState) -> None:
        for listener in self._tick_listeners:
            try:
                listener(timer_state)
            except Exception:
                self._logger.exception("Tick listener failed")

    def _on_timer_expired(self) -> None:
        index = self._state.current_index
        self._expiry_task = asyncio.get_running_loop().create_task(self._expire(index))

    async def _expire(self, question_index: int) -> None:
        # A manual submission processed first has already moved the session on.
        if (
            self._discarded
            or self._busy
            or self._state.status != SessionStatus.AWAITING_ANSWER
            or self._state.current_index != question_index
        ):
            self._logger.debug(f"Dropping stale timer expiry for question {question_index + 1}")
            return
        try:
            await self._apply_timeout()
        except CollaboratorError as e:
            self._logger.error(f"Interview {self._state.session_id} failed after timeout: {e}")
