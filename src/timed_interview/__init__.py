"""
Timed interview orchestrator.

Runs a fixed sequence of timed interview questions and hands answers to
external evaluation and summary services.
"""

__version__ = "0.1.0"
