"""
Tests for the AnalysisResult shape check
"""
import copy

import pytest

from posture_coach.models import AnalysisResult, Severity
from posture_coach.validator import ShapeError, validate_analysis


def test_valid_payload_round_trips(valid_payload):
    result = validate_analysis(valid_payload)
    assert isinstance(result, AnalysisResult)
    assert result.severity is Severity.mild
    assert result.model_dump(mode="json") == valid_payload


@pytest.mark.parametrize("raw", [[], "text", 3, None, True])
def test_root_must_be_object(raw):
    with pytest.raises(ShapeError) as exc:
        validate_analysis(raw)
    assert exc.value.field == "<root>"


@pytest.mark.parametrize("severity", ["severe", "Mild", "", None, 2, "needs attention"])
def test_unknown_severity_rejected(valid_payload, severity):
    valid_payload["severity"] = severity
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == "severity"
    assert "severity" in str(exc.value)


def test_analysis_must_be_string(valid_payload):
    valid_payload["analysis"] = ["ok"]
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == "analysis"


def test_checks_stop_at_first_failure(valid_payload):
    valid_payload["analysis"] = None
    valid_payload["severity"] = "bad"
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == "analysis"


@pytest.mark.parametrize("key,value", [
    ("issues", None),
    ("issues", "slouching"),
    ("issues", ["ok", 3]),
    ("tips", {"a": "b"}),
    ("tips", [None]),
])
def test_issues_and_tips_are_string_lists(valid_payload, key, value):
    valid_payload[key] = value
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == key


def test_empty_lists_are_fine(valid_payload):
    valid_payload["issues"] = []
    valid_payload["tips"] = []
    valid_payload["exercises"] = []
    result = validate_analysis(valid_payload)
    assert result.issues == [] and result.tips == [] and result.exercises == []


def test_exercises_must_be_list(valid_payload):
    valid_payload["exercises"] = {"name": "Chin Tuck"}
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == "exercises"


def test_empty_steps_rejected(valid_payload):
    second = copy.deepcopy(valid_payload["exercises"][0])
    second["steps"] = []
    valid_payload["exercises"].append(second)
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == "exercises[1].steps"


@pytest.mark.parametrize("key,value,field", [
    ("name", "", "exercises[0].name"),
    ("name", None, "exercises[0].name"),
    ("name", "   ", "exercises[0].name"),
    ("steps", "Tuck chin", "exercises[0].steps"),
    ("steps", ["Tuck chin", 5], "exercises[0].steps"),
    ("duration", 5, "exercises[0].duration"),
    ("frequency", None, "exercises[0].frequency"),
])
def test_bad_exercise_fields(valid_payload, key, value, field):
    valid_payload["exercises"][0][key] = value
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == field


def test_exercise_must_be_object(valid_payload):
    valid_payload["exercises"] = ["Chin Tuck"]
    with pytest.raises(ShapeError) as exc:
        validate_analysis(valid_payload)
    assert exc.value.field == "exercises[0]"


def test_extra_keys_ignored(valid_payload):
    valid_payload["disclaimer"] = "guidance only"
    valid_payload["exercises"][0]["equipment"] = "none"
    result = validate_analysis(valid_payload)
    assert "disclaimer" not in result.model_dump()
