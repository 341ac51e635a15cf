# rxparse/services/llm/prescription_sanitize.py
from typing import Any, Dict

from rxparse.schemas.models import FREQUENCY_CODES, StructuredPrescription
from rxparse.services.extraction import render_prescription_text
from rxparse.services.field_extractors import KEYWORD_PATTERNS, derive_frequency, duration_to_days
from rxparse.services.llm.prescription_schema import WIRE_FIELDS

DEFAULT_AI_CONFIDENCE = 0.5

_CODES_BY_UPPER = {code.upper(): code for code in FREQUENCY_CODES}
_ALIASES = {"TID": "TDS", "BID": "BD"}
_KEYWORD_BY_UPPER = {k.upper(): k for k in KEYWORD_PATTERNS}

def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()

def normalize_pattern(pattern_raw: str) -> str:
    p = pattern_raw.replace(" ", "")
    return _KEYWORD_BY_UPPER.get(p.upper(), p)

def _known_code(freq_raw: str) -> str:
    f = freq_raw.strip().upper()
    f = _ALIASES.get(f, f)
    return _CODES_BY_UPPER.get(f, "")

def normalize_frequency(freq_raw: str, pattern: str) -> str:
    """
    The pattern decides: keyword patterns carry themselves, numeric patterns
    derive from their non-zero slots (a remote HS is kept for 0-0-1). The
    remote code is only used when there is no pattern at all.
    """
    if pattern in KEYWORD_PATTERNS:
        return pattern
    remote = _known_code(freq_raw)
    if not pattern:
        return remote
    if remote == "HS" and pattern == "0-0-1":
        return remote
    return derive_frequency(pattern)

def normalize_confidence(value: Any) -> float:
    if value is None or value == "":
        return DEFAULT_AI_CONFIDENCE
    try:
        c = float(value)
    except (TypeError, ValueError):
        return DEFAULT_AI_CONFIDENCE
    return min(1.0, max(0.0, c))

def sanitize_ai_prescription(raw: Dict[str, Any]) -> StructuredPrescription:
    """
    Map the remote JSON object onto StructuredPrescription.
    Omitted or null fields become "", confidence defaults to 0.5.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"AI response is not a JSON object: {type(raw).__name__}")

    fields = {attr: _text(raw.get(wire)) for wire, attr in WIRE_FIELDS.items()}
    fields["pattern"] = normalize_pattern(fields["pattern"])
    fields["frequency"] = normalize_frequency(fields["frequency"], fields["pattern"])

    rx = StructuredPrescription(
        **fields,
        confidence=normalize_confidence(raw.get("confidence")),
        duration_days=duration_to_days(fields["duration"]),
    )
    rx.prescription_text = render_prescription_text(rx)
    return rx
