"""
Schemas for the App Reviews service.
"""

from .credential import Credential, SessionsFile
from .outcome import Failure, FailureReason, Outcome, RenderDirective, Success
from .submission import Submission, ValidatedReview

__all__ = [
    "Credential",
    "Failure",
    "FailureReason",
    "Outcome",
    "RenderDirective",
    "SessionsFile",
    "Submission",
    "Success",
    "ValidatedReview",
]
