"""Prompt templates for the dictation polish call."""

from dictation_polish.models.polish import PolishRequest

SYSTEM_PROMPT = (
    "You are a radiology report editor. "
    "Return ONLY valid JSON with keys: findings, impression. "
    "Keep the same language as the input."
)

_INSTRUCTIONS = [
    "Rewrite and polish this dictated dental radiology report text.",
    "- Keep the medical meaning.",
    "- Fix grammar, spelling, and structure.",
    "- If the text is short/fragmented, complete it into a professional report.",
    "- Output JSON ONLY in this schema:",
    '{ "findings": "...", "impression": "..." }',
]


def build_user_prompt(request: PolishRequest) -> str:
    patient = request.patient
    return "\n".join([
        *_INSTRUCTIONS,
        "",
        f"Template: {request.template or 'N/A'}",
        f"Patient: {patient.name} | ID: {patient.id} | Date: {patient.date}",
        "",
        "Raw text:",
        request.text,
    ])


def build_messages(request: PolishRequest) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(request)},
    ]
