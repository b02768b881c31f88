"""
Main entry point for the timed interview application.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from timed_interview.collaborators import (
    FunctionsAnswerEvaluator,
    FunctionsClient,
    FunctionsQuestionGenerator,
    FunctionsSummarizer,
)
from timed_interview.config import get_settings
from timed_interview.db import DatabaseSink, create_engine, create_session_factory, init_db
from timed_interview.io.text_interface import TextInterface
from timed_interview.orchestrator.interview_orchestrator import InterviewOrchestrator
from timed_interview.orchestrator.schemas import CandidateProfile


def setup_logging() -> None:
    """Configure application logging."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(prog="timed-interview", description="Run a timed interview in the terminal")
    parser.add_argument("--name", required=True, help="Candidate's full name")
    parser.add_argument("--email", default="", help="Candidate's email address")
    parser.add_argument("--phone", default="", help="Candidate's phone number")
    parser.add_argument("--resume-file", help="Path to a plain-text resume")
    parser.add_argument("--tick-seconds", type=float, help="Seconds per countdown unit (default from config)")
    parser.add_argument("--no-persist", action="store_true", help="Do not write results to the database")
    return parser


async def run_interview(argv: list[str] | None = None) -> None:
    """
    Run an interactive interview session.

    Wires the collaborator clients, optional persistence and the text
    interface together, then runs the interview loop.
    """
    settings = get_settings()
    logger = logging.getLogger(__name__)
    args = build_parser().parse_args(argv)

    resume_text = ""
    if args.resume_file:
        resume_text = Path(args.resume_file).expanduser().read_text(encoding="utf-8")

    candidate = CandidateProfile(
        name=args.name,
        email=args.email,
        phone=args.phone,
        resume_text=resume_text,
    )

    logger.info("Initializing timed interview...")
    logger.debug(f"Collaborator functions at: {settings.functions_base_url}")

    client = FunctionsClient()
    engine = None
    sink = None
    if settings.persist_results and not args.no_persist:
        engine = create_engine()
        await init_db(engine)
        sink = DatabaseSink(create_session_factory(engine))

    orchestrator = InterviewOrchestrator(
        candidate=candidate,
        question_generator=FunctionsQuestionGenerator(client),
        evaluator=FunctionsAnswerEvaluator(client),
        summarizer=FunctionsSummarizer(client),
        sink=sink,
        tick_interval=args.tick_seconds,
    )

    try:
        await TextInterface(orchestrator).run()
    finally:
        await client.close()
        if engine is not None:
            await engine.dispose()


def main() -> None:
    """Main entry point for the application."""
    setup_logging()

    try:
        asyncio.run(run_interview(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nInterview session terminated by user.")
        sys.exit(0)
    except Exception as e:
        logging.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
