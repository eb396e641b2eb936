# posture_coach/models.py
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

YesNo = Literal["yes", "no"]
Duration = Literal["1-7days", "1-4weeks", ">1month"]


class Assessment(BaseModel):
    """
    Questionnaire answers. Every field starts unanswered ("" or None) and
    only a complete assessment may be sent for analysis.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    neck_pain: Optional[YesNo] = Field(default=None, alias="neckPain")
    back_pain: Optional[YesNo] = Field(default=None, alias="backPain")
    shoulder_stiffness: Optional[YesNo] = Field(default=None, alias="shoulderStiffness")
    poor_posture: Optional[YesNo] = Field(default=None, alias="poorPosture")
    duration: Optional[Duration] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_unanswered(cls, v):
        if isinstance(v, str) and v == "":
            return None
        return v

    def missing_fields(self) -> List[str]:
        """Wire names of unanswered fields, in questionnaire order."""
        missing = []
        for name, info in type(self).model_fields.items():
            if getattr(self, name) is None:
                missing.append(info.alias or name)
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()


class Severity(str, Enum):
    mild = "mild"
    moderate = "moderate"
    needs_attention = "needs_attention"


class Exercise(BaseModel):
    name: str
    steps: List[str] = Field(min_length=1)
    duration: str     # e.g. "10 minutes"
    frequency: str    # e.g. "2 times per day"


class AnalysisResult(BaseModel):
    analysis: str
    severity: Severity
    issues: List[str]
    exercises: List[Exercise]
    tips: List[str]


class AnalyzeRequest(BaseModel):
    assessment: Assessment
