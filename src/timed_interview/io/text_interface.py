"""
Text-based interview interface.

Provides a command-line front-end for a timed interview session. The
countdown keeps running while the candidate types; an answer entered
after its question timed out is rejected rather than applied to the
next question.
"""

import asyncio
from abc import ABC, abstractmethod

from timed_interview.orchestrator.errors import (
    AnswerValidationError,
    BusyError,
    CollaboratorError,
    StateError,
)
from timed_interview.orchestrator.interview_orchestrator import InterviewOrchestrator
from timed_interview.orchestrator.schemas import InterviewSession, Message, MessageRole, SessionStatus, TimerState

QUIT_COMMANDS = ("quit", "exit")


class InterviewInterface(ABC):
    """Abstract base class for interview interfaces."""

    @abstractmethod
    async def run(self) -> None:
        """Run the interview interface."""
        ...

    @abstractmethod
    async def send_message(self, message: str) -> None:
        """
        Send a message to the user.

        Args:
            message: Message to display.
        """
        ...

    @abstractmethod
    async def receive_input(self) -> str:
        """
        Receive input from the user.

        Returns:
            User's input string.
        """
        ...


class TextInterface(InterviewInterface):
    """
    Command-line text interface for interviews.

    Prints transcript messages as the orchestrator appends them and
    reads answers on a worker thread so the timer is never blocked.
    """

    POLL_SECONDS = 0.2

    def __init__(self, orchestrator: InterviewOrchestrator) -> None:
        """
        Initialize the text interface.

        Args:
            orchestrator: Interview orchestrator to drive.
        """
        self._orchestrator = orchestrator
        self._alert_level = 0
        orchestrator.transcript.subscribe(self._on_message)
        orchestrator.add_tick_listener(self._on_tick)

    async def run(self) -> None:
        """Run the interactive interview session."""
        print("\n" + "=" * 60)
        print("AI Interview Assistant")
        print("=" * 60 + "\n")

        try:
            await self._orchestrator.start()
        except CollaboratorError as e:
            await self.send_message(f"Failed to start interview: {e}")
            return

        while not self._orchestrator.is_finished:
            question_index = self._orchestrator.state.current_index
            input_task = asyncio.ensure_future(self.receive_input())
            while not input_task.done() and not self._orchestrator.is_finished:
                await asyncio.wait({input_task}, timeout=self.POLL_SECONDS)

            if not input_task.done():
                # Finished by a timeout while the candidate was typing.
                await self._orchestrator.settle()
                await self._display_result(self._orchestrator.session)
                print("Press Enter to exit.")
                await input_task
                return

            candidate_input = input_task.result()
            if candidate_input.strip().lower() in QUIT_COMMANDS:
                self._orchestrator.abandon()
                print("\nInterview abandoned.")
                return

            try:
                await self._orchestrator.submit(candidate_input, question_index=question_index)
            except AnswerValidationError:
                await self.send_message("Please provide an answer.")
            except BusyError:
                await self.send_message("Still working on your previous answer, please wait.")
            except StateError:
                await self.send_message("That question has already timed out.")
            except CollaboratorError as e:
                await self.send_message(f"Failed to submit answer: {e}")

        await self._orchestrator.settle()
        await self._display_result(self._orchestrator.session)

    async def send_message(self, message: str) -> None:
        """
        Display a message to the terminal.

        Args:
            message: Message to display.
        """
        print(f"\n{message}\n")

    async def receive_input(self) -> str:
        """
        Get input from the terminal.

        Returns:
            User's input string.
        """
        return await self._get_input("You: ")

    async def _get_input(self, prompt: str) -> str:
        """
        Get input with a specific prompt without blocking the event loop.

        Args:
            prompt: Prompt to display.

        Returns:
            User's input.
        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, input, prompt)
        except EOFError:
            return "exit"

    def _on_message(self, message: Message) -> None:
        if message.role == MessageRole.SYSTEM:
            print(f"\nInterviewer: {message.content}")
            # Question announcements are the only messages appended while presenting.
            question = self._orchestrator.state.current_question
            if self._orchestrator.status == SessionStatus.PRESENTING and question is not None:
                budget = question.allotted_duration
                print(f"[{TimerState(remaining=budget, total=budget).clock()} to answer]\n")

    def _on_tick(self, timer_state: TimerState) -> None:
        level = 2 if timer_state.is_danger else 1 if timer_state.is_warning else 0
        if level > self._alert_level and timer_state.remaining > 0:
            print(f"\n[{timer_state.clock()} left]")
        self._alert_level = level

    async def _display_result(self, session: InterviewSession) -> None:
        """
        Display the interview result.

        Args:
            session: Final session snapshot.
        """
        print("\n" + "=" * 60)
        print("Interview Summary")
        print("=" * 60)
        print(f"\nCandidate: {session.candidate.name}")
        print(f"Status: {session.status.value}")
        print(f"Answered: {len(session.responses)}/{len(session.questions)}")

        if session.responses:
            print("\nResponses:")
            for index, response in enumerate(session.responses, start=1):
                score = f"{response.score:g}" if response.score is not None else "-"
                print(
                    f"  {index}. [{response.difficulty.value}] score {score}, "
                    f"{response.time_taken_units}/{response.question.allotted_duration} units"
                )

        if session.score is not None:
            print(f"\nOverall Score: {session.score:g}/100 ({session.score_band.value})")

        if session.summary:
            print(f"\nSummary: {session.summary}")

        if session.error_kind:
            print(f"\nInterview stopped: {session.error_kind}")

        print("\n" + "=" * 60)
