# posture_coach/prompts.py
from typing import Tuple

from .errors import AssessmentIncomplete
from .models import Assessment

SYSTEM_PROMPT = (
    "You are a posture and alignment guidance assistant inside a self-care app. "
    "You are NOT a doctor and you never diagnose.\n\n"
    "Based on the user's assessment answers, provide:\n"
    "1. A brief analysis of their situation (2-3 sentences)\n"
    "2. A severity level: \"mild\", \"moderate\", or \"needs_attention\"\n"
    "3. A list of specific alignment issues identified\n"
    "4. 3-4 recommended exercises with detailed steps, duration, and frequency\n"
    "5. 3-5 practical posture correction tips and daily activity modifications\n\n"
    "IMPORTANT SAFETY GUIDELINES:\n"
    "- If discomfort has lasted more than a month (duration \">1month\") and more than one "
    "symptom is answered \"yes\", set severity to \"needs_attention\" and recommend "
    "consulting a licensed healthcare professional.\n"
    "- Keep recommendations focused on minor alignment issues only.\n"
    "- Say clearly in the analysis that this is general guidance, not a medical diagnosis.\n"
    "- All exercises must be gentle and safe for beginners.\n\n"
    "You MUST respond with a SINGLE JSON object ONLY, no commentary, no markdown.\n\n"
    "JSON format:\n"
    "{\n"
    '  "analysis": string,                 // 2-3 sentence summary\n'
    '  "severity": "mild" | "moderate" | "needs_attention",\n'
    '  "issues": [string, ...],\n'
    '  "exercises": [\n'
    "    {\n"
    '      "name": string,\n'
    '      "steps": [string, ...],         // at least one step\n'
    '      "duration": string,             // e.g. "10 minutes"\n'
    '      "frequency": string             // e.g. "2 times per day"\n'
    "    }\n"
    "  ],\n"
    '  "tips": [string, ...]\n'
    "}\n"
)

USER_PROMPT_TEMPLATE = (
    "Assessment Results:\n"
    "- Neck pain: {neck_pain}\n"
    "- Back pain: {back_pain}\n"
    "- Shoulder stiffness: {shoulder_stiffness}\n"
    "- Poor sitting posture: {poor_posture}\n"
    "- Duration of discomfort: {duration}\n\n"
    "Please analyze this assessment and provide personalized recommendations."
)


def build_prompts(assessment: Assessment) -> Tuple[str, str]:
    """
    Returns (system_prompt, user_prompt) for a complete assessment.
    Answers are restricted to fixed enumerations, so they go into the
    template verbatim.
    """
    missing = assessment.missing_fields()
    if missing:
        raise AssessmentIncomplete(missing)

    user_prompt = USER_PROMPT_TEMPLATE.format(
        neck_pain=assessment.neck_pain,
        back_pain=assessment.back_pain,
        shoulder_stiffness=assessment.shoulder_stiffness,
        poor_posture=assessment.poor_posture,
        duration=assessment.duration,
    )
    return SYSTEM_PROMPT, user_prompt
