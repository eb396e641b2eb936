# posture_coach/validator.py
from typing import Any

from .models import AnalysisResult, Severity

SEVERITIES = tuple(s.value for s in Severity)


class ShapeError(ValueError):
    """The model payload does not match the AnalysisResult shape."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _check_exercise(index: int, item: Any) -> None:
    path = f"exercises[{index}]"
    if not isinstance(item, dict):
        raise ShapeError(path, "expected an object")

    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ShapeError(f"{path}.name", "expected a non-empty string")

    steps = item.get("steps")
    if not _is_str_list(steps):
        raise ShapeError(f"{path}.steps", "expected a list of strings")
    if not steps:
        raise ShapeError(f"{path}.steps", "expected at least one step")

    for key in ("duration", "frequency"):
        if not isinstance(item.get(key), str):
            raise ShapeError(f"{path}.{key}", "expected a string")


def validate_analysis(raw: Any) -> AnalysisResult:
    """
    Check a decoded model payload and build the AnalysisResult from it.

    Checks run in a fixed order and stop at the first failure, so the
    ShapeError always names the first offending field. Unknown keys are
    ignored; nothing is coerced.
    """
    if not isinstance(raw, dict):
        raise ShapeError("<root>", f"expected a JSON object, got {type(raw).__name__}")

    if not isinstance(raw.get("analysis"), str):
        raise ShapeError("analysis", "expected a string")

    severity = raw.get("severity")
    if not isinstance(severity, str) or severity not in SEVERITIES:
        raise ShapeError("severity", f"expected one of {', '.join(SEVERITIES)}, got {severity!r}")

    for key in ("issues", "tips"):
        if not _is_str_list(raw.get(key)):
            raise ShapeError(key, "expected a list of strings")

    exercises = raw.get("exercises")
    if not isinstance(exercises, list):
        raise ShapeError("exercises", "expected a list")
    for i, item in enumerate(exercises):
        _check_exercise(i, item)

    return AnalysisResult.model_validate({
        "analysis": raw["analysis"],
        "severity": severity,
        "issues": raw["issues"],
        "exercises": [
            {k: ex[k] for k in ("name", "steps", "duration", "frequency")}
            for ex in exercises
        ],
        "tips": raw["tips"],
    })
