"""
Tests for the HTTP collaborators.

Requests are served by an in-process ``httpx.MockTransport``.
"""

import json
from collections.abc import Callable

import httpx
import pytest

from timed_interview.collaborators import (
    EvaluationRequest,
    FunctionsAnswerEvaluator,
    FunctionsClient,
    FunctionsQuestionGenerator,
    FunctionsSummarizer,
    QuestionRequest,
    ServiceError,
    SummaryItem,
    SummaryRequest,
)
from timed_interview.orchestrator import Difficulty

BASE_URL = "http://functions.test/functions/v1"

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler, api_key: str | None = "secret") -> FunctionsClient:
    return FunctionsClient(
        base_url=BASE_URL,
        api_key=api_key,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


class TestFunctionsClient:
    """Tests for FunctionsClient class."""

    @pytest.mark.asyncio
    async def test_posts_json_with_bearer_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        client = make_client(handler)
        try:
            result = await client.invoke("ping", {"value": 1})
        finally:
            await client.close()

        assert result == {"ok": True}
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/functions/v1/ping"
        assert seen[0].headers["Authorization"] == "Bearer secret"
        assert json.loads(seen[0].content) == {"value": 1}

    @pytest.mark.asyncio
    async def test_error_status(self) -> None:
        client = make_client(lambda request: httpx.Response(503, text="unavailable"))
        try:
            with pytest.raises(ServiceError) as exc_info:
                await client.invoke("evaluate-response", {})
        finally:
            await client.close()

        assert exc_info.value.status_code == 503
        assert exc_info.value.function == "evaluate-response"

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        try:
            with pytest.raises(ServiceError, match="request failed"):
                await client.invoke("generate-summary", {})
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        try:
            with pytest.raises(ServiceError, match="non-JSON"):
                await client.invoke("generate-questions", {})
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_no_authorization_without_key(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = FunctionsClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        client._api_key = None
        try:
            await client.invoke("ping", {})
        finally:
            await client.close()

        assert "Authorization" not in seen[0].headers


class TestFunctionsCollaborators:
    """Tests for the function-backed generator, evaluator and summarizer."""

    @pytest.mark.asyncio
    async def test_generate_questions(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith("/generate-questions")
            bodies.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={
                    "questions": [
                        {"question": "What is a tuple?", "difficulty": "easy"},
                        {"question": "Design a cache.", "difficulty": "hard"},
                    ]
                },
            )

        client = make_client(handler)
        try:
            questions = await FunctionsQuestionGenerator(client).generate(
                QuestionRequest(candidate_name="Grace Hopper", resume_text="COBOL")
            )
        finally:
            await client.close()

        assert bodies == [{"candidateName": "Grace Hopper", "resumeText": "COBOL"}]
        assert [q.to_question().allotted_duration for q in questions] == [20, 120]
        assert questions[1].difficulty == Difficulty.HARD

    @pytest.mark.asyncio
    async def test_generate_accepts_bare_list(self) -> None:
        client = make_client(
            lambda request: httpx.Response(200, json=[{"question": "Why?", "difficulty": "medium"}])
        )
        try:
            questions = await FunctionsQuestionGenerator(client).generate(QuestionRequest(candidate_name="Grace"))
        finally:
            await client.close()

        assert [q.question for q in questions] == ["Why?"]

    @pytest.mark.asyncio
    async def test_generate_rejects_unknown_difficulty(self) -> None:
        client = make_client(
            lambda request: httpx.Response(200, json={"questions": [{"question": "Q", "difficulty": "expert"}]})
        )
        try:
            with pytest.raises(ServiceError, match="malformed question"):
                await FunctionsQuestionGenerator(client).generate(QuestionRequest(candidate_name="Grace"))
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_generate_rejects_missing_list(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json={"error": "quota"}))
        try:
            with pytest.raises(ServiceError, match="no questions list"):
                await FunctionsQuestionGenerator(client).generate(QuestionRequest(candidate_name="Grace"))
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_evaluate(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"score": 72.5, "feedback": "Good coverage."})

        client = make_client(handler)
        try:
            result = await FunctionsAnswerEvaluator(client).evaluate(
                EvaluationRequest(question="What is a tuple?", answer="Immutable list", difficulty=Difficulty.EASY)
            )
        finally:
            await client.close()

        assert bodies == [{"question": "What is a tuple?", "answer": "Immutable list", "difficulty": "easy"}]
        assert result.score == 72.5
        assert result.feedback == "Good coverage."

    @pytest.mark.asyncio
    async def test_evaluate_rejects_out_of_range_score(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json={"score": 140, "feedback": ""}))
        try:
            with pytest.raises(ServiceError, match="malformed evaluation"):
                await FunctionsAnswerEvaluator(client).evaluate(
                    EvaluationRequest(question="Q", answer="A", difficulty=Difficulty.EASY)
                )
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_summarize(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"score": 64, "summary": "Solid basics."})

        request = SummaryRequest(
            candidate_name="Grace Hopper",
            responses=[
                SummaryItem(question="Q1", answer="A1", difficulty=Difficulty.EASY, score=70, feedback="Fine"),
                SummaryItem(question="Q2", answer="(No answer provided)", difficulty=Difficulty.MEDIUM),
            ],
        )
        client = make_client(handler)
        try:
            result = await FunctionsSummarizer(client).summarize(request)
        finally:
            await client.close()

        assert bodies[0]["candidateName"] == "Grace Hopper"
        assert bodies[0]["responses"][1] == {
            "question": "Q2",
            "answer": "(No answer provided)",
            "difficulty": "medium",
            "score": None,
            "feedback": None,
        }
        assert result.score == 64
        assert result.summary == "Solid basics."
