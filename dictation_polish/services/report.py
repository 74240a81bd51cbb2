"""Turn the model's reply into a findings/impression report.

The model is asked for JSON but may answer in prose. Parsing therefore
yields either a :class:`ParsedReport` or an :class:`UnparsedReport`, and
:func:`normalize_report` repairs both into a :class:`PolishedReport`.
"""

import json
import logging
from dataclasses import dataclass, field

from dictation_polish.models.polish import PolishedReport, coerce_text, is_truthy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedReport:
    fields: dict = field(default_factory=dict)


@dataclass(frozen=True)
class UnparsedReport:
    raw: str


ParseResult = ParsedReport | UnparsedReport


def parse_report_content(content: str) -> ParseResult:
    try:
        data = json.loads(content)
    except ValueError:
        return UnparsedReport(raw=content)
    # Valid JSON that is not an object carries no report fields
    return ParsedReport(fields=data if isinstance(data, dict) else {})


def _pick(fields: dict, key: str) -> str:
    # Only the lower-case and fully upper-case spellings are recognised
    value = fields.get(key)
    if not is_truthy(value):
        value = fields.get(key.upper())
    return coerce_text(value).strip()


def normalize_report(result: ParseResult, text: str) -> PolishedReport:
    """Build the final report; ``findings`` is never empty for non-empty ``text``."""
    if isinstance(result, UnparsedReport):
        logger.info("Model reply is not JSON, using raw content as findings")
        fields = {"findings": result.raw or text, "impression": ""}
    else:
        fields = result.fields

    findings = _pick(fields, "findings")
    impression = _pick(fields, "impression")
    if not findings:
        findings = text
    return PolishedReport(findings=findings, impression=impression)
