# posture_coach/errors.py
from typing import List, Optional

GENERIC_RETRY_MESSAGE = "We couldn't analyze your assessment. Please try again."


class AnalysisError(Exception):
    """
    Base of every failure the analysis pipeline reports.
    None of them are retried; the user goes back to the questionnaire.
    """
    kind = "analysis_error"
    status_code = 500
    user_message = GENERIC_RETRY_MESSAGE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)
        self.message = message or self.user_message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.user_message, "detail": self.message}


class AssessmentIncomplete(AnalysisError):
    kind = "validation_error"
    status_code = 400
    user_message = "Please answer all questions before proceeding."

    def __init__(self, missing: List[str]):
        super().__init__("incomplete assessment, missing: " + ", ".join(missing))
        self.missing = list(missing)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["missing"] = self.missing
        return data


class RateLimited(AnalysisError):
    kind = "rate_limited"
    status_code = 429
    user_message = "Too many requests. Please try again in a few moments."


class QuotaExceeded(AnalysisError):
    kind = "quota_exceeded"
    status_code = 402
    user_message = "Service unavailable. Please contact support to add credits to your workspace."


class ProviderError(AnalysisError):
    kind = "provider_error"


class MalformedResponse(AnalysisError):
    kind = "malformed_response"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
