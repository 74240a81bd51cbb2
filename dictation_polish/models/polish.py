import math
from typing import Any

from pydantic import BaseModel


def is_truthy(value: Any) -> bool:
    """Truthiness as browsers judge JSON values: containers are always truthy."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def coerce_text(value: Any) -> str:
    """Render a loosely-typed JSON value as text.

    Falsy values (None, "", 0, NaN, False) become "". Other values follow
    the string rendering browsers apply to JSON data, so ``True`` is "true",
    ``14.0`` is "14", lists are comma-joined (an empty list is "") and
    objects, empty or not, are "[object Object]".
    """
    if not is_truthy(value):
        return ""
    return _render(value)


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("Infinity" if value > 0 else "-Infinity")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return ",".join("" if item is None else _render(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


class PatientInfo(BaseModel):
    name: str = ""
    id: str = ""
    date: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "PatientInfo":
        if not isinstance(payload, dict):
            return cls()
        return cls(
            name=coerce_text(payload.get("name")),
            id=coerce_text(payload.get("id")),
            date=coerce_text(payload.get("date")),
        )


class PolishRequest(BaseModel):
    """Dictation submitted for polishing. ``text`` is already trimmed."""

    text: str
    patient: PatientInfo = PatientInfo()
    template: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "PolishRequest":
        if not isinstance(payload, dict):
            payload = {}
        return cls(
            text=coerce_text(payload.get("text")).strip(),
            patient=PatientInfo.from_payload(payload.get("patient")),
            template=coerce_text(payload.get("template")),
        )


class PolishedReport(BaseModel):
    findings: str
    impression: str


class ErrorBody(BaseModel):
    error: str
    details: str | None = None
