"""
IO module for interview interfaces.
"""

from timed_interview.io.text_interface import InterviewInterface, TextInterface

__all__ = ["InterviewInterface", "TextInterface"]
