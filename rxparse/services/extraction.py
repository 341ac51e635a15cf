import logging
from typing import List, Optional

from rxparse.schemas.models import StructuredPrescription
from rxparse.services.field_extractors import (
    DEFAULT_CONFIG,
    KEYWORD_PATTERNS,
    ExtractorConfig,
    FieldMatch,
    duration_to_days,
    extract_dose_form,
    extract_dose_pattern,
    extract_duration,
    extract_potency,
    extract_quantity,
)
from rxparse.services.medicine_name import extract_medicine_name

logger = logging.getLogger(__name__)

HEURISTIC_CONFIDENCE = 0.5

_SLOTS = ("morning", "afternoon", "night")


def _value(found: Optional[FieldMatch]) -> str:
    return found.value if found else ""


def _extra(found: Optional[FieldMatch]) -> str:
    return found.extra if found else ""


def render_prescription_text(rx: StructuredPrescription) -> str:
    """
    Human-readable summary printed on the prescription slip, e.g.

        Nux Vomica 200C
        4 pills morning – 4 pills afternoon – 4 pills night
        for 7 days
    """
    lines: List[str] = []
    if rx.medicine_name:
        lines.append(f"{rx.medicine_name} {rx.potency}".strip())

    if rx.dose_per_intake and rx.dose_form and rx.pattern:
        dose = f"{rx.dose_per_intake} {rx.dose_form}"
        doses = rx.pattern.split("-")
        if rx.pattern in KEYWORD_PATTERNS:
            lines.append(f"{dose} {rx.pattern}")
        elif len(doses) == 3:
            parts = [f"{dose} {slot}" for count, slot in zip(doses, _SLOTS) if count != "0"]
            if parts:
                lines.append(" – ".join(parts))

    if rx.duration:
        lines.append(f"for {rx.duration}")
    return "\n".join(lines)


def heuristic_parse(text: str, config: ExtractorConfig = DEFAULT_CONFIG) -> Optional[StructuredPrescription]:
    """
    Deterministic parse of one prescription line. Returns None for blank
    input; otherwise always a result, with missing fields left as "".
    An empty medicine_name means nothing usable was found.
    """
    original = (text or "").strip()
    if not original:
        return None

    # potency and pattern first: the name scan needs them to decide where to stop
    potency = extract_potency(original, config)
    pattern = extract_dose_pattern(original, config)
    name = extract_medicine_name(original, _value(potency), config)

    quantity = extract_quantity(original, config)
    dose_form = extract_dose_form(original, config)
    duration = extract_duration(original, config)

    rx = StructuredPrescription(
        medicine_name=name,
        potency=_value(potency),
        quantity=_value(quantity),
        dose_form=_value(dose_form),
        dose_per_intake=_extra(dose_form),
        frequency=_extra(pattern),
        pattern=_value(pattern),
        duration=_value(duration),
        confidence=HEURISTIC_CONFIDENCE,
        duration_days=duration_to_days(_value(duration)),
    )
    rx.prescription_text = render_prescription_text(rx)

    logger.debug("heuristic parse %r -> %s", original, rx.model_dump())
    return rx
