"""
Database module for persistence.

Provides SQLAlchemy models, repositories and the persistence sink that
stores candidates and their interview responses.
"""

from timed_interview.db.engine import create_engine, create_session_factory, init_db
from timed_interview.db.models import Base, CandidateModel, InterviewResponseModel
from timed_interview.db.repository import (
    CandidateRepository,
    DatabaseSink,
    ResponseRepository,
)

__all__ = [
    "Base",
    "CandidateModel",
    "CandidateRepository",
    "DatabaseSink",
    "InterviewResponseModel",
    "ResponseRepository",
    "create_engine",
    "create_session_factory",
    "init_db",
]
