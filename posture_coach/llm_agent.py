# posture_coach/llm_agent.py   one assessment in, one model call, one validated result out

import json
import logging
from typing import Any, Optional

from .completion import (
    CompletionClient,
    CompletionFormatError,
    CompletionHTTPError,
    CompletionTransportError,
    MissingCredential,
    get_completion_client,
)
from .errors import (
    AssessmentIncomplete,
    MalformedResponse,
    ProviderError,
    QuotaExceeded,
    RateLimited,
)
from .models import AnalysisResult, Assessment, Severity
from .prompts import build_prompts
from .validator import ShapeError, validate_analysis

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429
PAYMENT_REQUIRED_STATUS = 402


def _parse_llm_json(raw: str) -> Any:
    """Decode the model's JSON answer, tolerating a ``` fence around it."""
    text = raw.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:].strip()
    return json.loads(text)


def expects_needs_attention(assessment: Assessment) -> bool:
    """Escalation rule the prompt asks the model to follow: >1 month and 2+ symptoms."""
    symptoms = (
        assessment.neck_pain,
        assessment.back_pain,
        assessment.shoulder_stiffness,
        assessment.poor_posture,
    )
    return assessment.duration == ">1month" and sum(s == "yes" for s in symptoms) >= 2


def analyze_assessment(
    assessment: Assessment,
    client: Optional[CompletionClient] = None,
) -> AnalysisResult:
    """
    Calls the completion model once and returns the validated AnalysisResult.
    Every failure is raised as an AnalysisError subclass; nothing is retried.
    """
    missing = assessment.missing_fields()
    if missing:
        logger.warning("Rejected incomplete assessment, missing: %s", ", ".join(missing))
        raise AssessmentIncomplete(missing)

    system_prompt, user_prompt = build_prompts(assessment)
    if client is None:
        try:
            client = get_completion_client()
        except ValueError as e:
            logger.error("Completion client misconfigured: %s", e)
            raise ProviderError(str(e)) from e

    logger.info("Calling completion model for posture analysis (%s)", type(client).__name__)
    try:
        raw = client.complete(system_prompt, user_prompt)
    except MissingCredential as e:
        logger.error("No API key configured for provider %s", e.provider)
        raise ProviderError("missing credential") from e
    except CompletionHTTPError as e:
        logger.error("Completion endpoint error: %s %s", e.status_code, e.body)
        if e.status_code == RATE_LIMIT_STATUS:
            raise RateLimited(f"completion endpoint returned {e.status_code}") from e
        if e.status_code == PAYMENT_REQUIRED_STATUS:
            raise QuotaExceeded(f"completion endpoint returned {e.status_code}") from e
        raise ProviderError(f"completion endpoint returned {e.status_code}: {e.body}") from e
    except CompletionTransportError as e:
        logger.error("Completion transport failure: %s", e)
        raise ProviderError(str(e)) from e
    except CompletionFormatError as e:
        logger.error("Completion envelope unusable: %s", e)
        raise MalformedResponse(str(e)) from e
    except Exception as e:
        # anything else from the provider SDK stays inside the error taxonomy
        logger.exception("Unexpected completion client failure")
        raise ProviderError(f"{type(e).__name__}: {e}") from e

    try:
        payload = _parse_llm_json(raw)
    except (ValueError, RecursionError) as e:
        logger.error("Could not parse model JSON. Raw: %.500s", raw)
        raise MalformedResponse("model content is not valid JSON") from e

    try:
        result = validate_analysis(payload)
    except ShapeError as e:
        logger.error("Model JSON failed shape check at %s: %s", e.field, e.reason)
        raise MalformedResponse(str(e), field=e.field) from e

    # the rule stays advisory: log the miss, never override the model
    if expects_needs_attention(assessment) and result.severity != Severity.needs_attention:
        logger.warning(
            "Model severity %s ignores escalation rule (duration=%s)",
            result.severity.value, assessment.duration,
        )

    logger.info("Posture analysis complete: severity=%s", result.severity.value)
    return result
