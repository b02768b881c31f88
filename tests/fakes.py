"""
In-memory collaborators used by the orchestrator tests.
"""

import asyncio

from timed_interview.collaborators import (
    AnswerEvaluatorBase,
    CandidateRecord,
    EvaluationRequest,
    EvaluationResult,
    FinalUpdate,
    GeneratedQuestion,
    PersistenceSinkBase,
    QuestionGeneratorBase,
    QuestionRequest,
    ResponseRecord,
    ServiceError,
    SummarizerBase,
    SummaryRequest,
    SummaryResult,
)
from timed_interview.orchestrator.schemas import Difficulty


def make_questions(*difficulties: Difficulty) -> list[GeneratedQuestion]:
    return [
        GeneratedQuestion(question=f"Question about topic {i}?", difficulty=difficulty)
        for i, difficulty in enumerate(difficulties)
    ]


class FakeGenerator(QuestionGeneratorBase):
    def __init__(self, questions: list[GeneratedQuestion] | None = None, fail: bool = False) -> None:
        self._questions = questions if questions is not None else make_questions(
            Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD
        )
        self._fail = fail
        self.calls: list[QuestionRequest] = []

    async def generate(self, request: QuestionRequest) -> list[GeneratedQuestion]:
        self.calls.append(request)
        if self._fail:
            raise ServiceError("generator unavailable", function="generate-questions")
        return list(self._questions)


class FakeEvaluator(AnswerEvaluatorBase):
    def __init__(
        self,
        score: float = 80.0,
        fail_on: set[str] | None = None,
        gate: asyncio.Event | None = None,
        feedback: str | None = None,
    ) -> None:
        self._score = score
        self._feedback = feedback
        self._fail_on = fail_on or set()
        self._gate = gate
        self.calls: list[EvaluationRequest] = []
        self.waiting = asyncio.Event()

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        self.calls.append(request)
        if self._gate is not None:
            self.waiting.set()
            await self._gate.wait()
        if request.question in self._fail_on:
            raise ServiceError("evaluator unavailable", function="evaluate-response")
        feedback = self._feedback if self._feedback is not None else f"Feedback on: {request.answer}"
        return EvaluationResult(score=self._score, feedback=feedback)


class FakeSummarizer(SummarizerBase):
    def __init__(self, score: float = 75.0, fail: bool = False) -> None:
        self._score = score
        self._fail = fail
        self.calls: list[SummaryRequest] = []

    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        self.calls.append(request)
        if self._fail:
            raise ServiceError("summarizer unavailable", function="generate-summary")
        return SummaryResult(score=self._score, summary=f"{request.candidate_name} did well.")


class FakeSink(PersistenceSinkBase):
    def __init__(self) -> None:
        self.candidates: list[CandidateRecord] = []
        self.responses: list[ResponseRecord] = []
        self.final_updates: list[FinalUpdate] = []

    async def register_candidate(self, record: CandidateRecord) -> str:
        self.candidates.append(record)
        return f"candidate-{len(self.candidates)}"

    async def record_response(self, record: ResponseRecord) -> None:
        self.responses.append(record)

    async def finalize(self, update: FinalUpdate) -> None:
        self.final_updates.append(update)
