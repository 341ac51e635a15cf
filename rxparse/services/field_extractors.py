# rxparse/services/field_extractors.py
"""
Single-purpose matchers for the fields of a one-line prescription.

Every field has an ordered tuple of strategies; the first strategy that
returns a FieldMatch wins. All vocabularies live in ExtractorConfig so the
tables can be swapped per call (tests, clinic-specific keywords).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

# keyword -> (dose pattern, frequency code); scanned in insertion order
DEFAULT_FREQUENCY_TABLE: Dict[str, Tuple[str, str]] = {
    "od": ("1-0-0", "OD"),
    "bd": ("1-0-1", "BD"),
    "tds": ("1-1-1", "TDS"),
    "tid": ("1-1-1", "TDS"),
    "qid": ("1-1-1-1", "QID"),
    "hs": ("0-0-1", "HS"),
    "sos": ("SOS", "SOS"),
    "weekly": ("Weekly", "Weekly"),
    "monthly": ("Monthly", "Monthly"),
}

FREQUENCY_BY_COUNT: Dict[int, str] = {1: "OD", 2: "BD", 3: "TDS", 4: "QID"}
KEYWORD_PATTERNS = ("SOS", "Weekly", "Monthly")

TYPICAL_POTENCIES: FrozenSet[int] = frozenset({1, 3, 6, 12, 30, 60, 100, 200, 1000, 10000})

_DAYS_PER_UNIT = {"day": 1, "week": 7, "month": 30}


@dataclass(frozen=True)
class ExtractorConfig:
    frequency_table: Dict[str, Tuple[str, str]] = field(
        default_factory=lambda: dict(DEFAULT_FREQUENCY_TABLE)
    )
    typical_potencies: FrozenSet[int] = TYPICAL_POTENCIES
    potency_suffixes: Tuple[str, ...] = ("c", "ch", "m", "x")
    quantity_units: Tuple[str, ...] = ("dr", "oz", "ml")
    # forms that may carry a per-intake count ("4 pills")
    counted_dose_forms: Tuple[str, ...] = (
        "pills", "pill", "drops", "drop", "tablets", "tablet",
        "capsules", "capsule", "powder", "ointment", "cream",
    )
    # forms only recognized on their own
    plain_dose_forms: Tuple[str, ...] = ("liquid",)
    duration_units: Tuple[str, ...] = ("days", "day", "weeks", "week", "months", "month")
    connector_words: Tuple[str, ...] = ("for",)

    def dose_forms(self) -> Tuple[str, ...]:
        return self.counted_dose_forms + self.plain_dose_forms

    def stop_words(self) -> FrozenSet[str]:
        """Lower-cased words that end a medicine name."""
        return frozenset(
            self.quantity_units
            + self.dose_forms()
            + tuple(self.frequency_table)
            + self.connector_words
            + self.duration_units
        )


DEFAULT_CONFIG = ExtractorConfig()


@dataclass(frozen=True)
class FieldMatch:
    value: str
    span: Tuple[int, int]
    # per-intake count for dose forms, frequency code for dose patterns
    extra: str = ""


Strategy = Callable[[str, ExtractorConfig], Optional[FieldMatch]]


def _alternation(words: Iterable[str]) -> str:
    # longest first so "ch" is tried before "c", "pills" before "pill"
    return "|".join(re.escape(w) for w in sorted(set(words), key=len, reverse=True))


def _first_match(strategies: Sequence[Strategy], text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    for strategy in strategies:
        found = strategy(text, config)
        if found is not None:
            return found
    return None


# ---------------------------
# Duration
# ---------------------------
def _duration(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    m = re.search(rf"\b(\d+)\s*({_alternation(config.duration_units)})\b", text, re.I)
    if not m:
        return None
    unit = m.group(2).lower()
    if not unit.endswith("s"):
        unit += "s"
    return FieldMatch(f"{m.group(1)} {unit}", m.span())

DURATION_STRATEGIES: Tuple[Strategy, ...] = (_duration,)

def extract_duration(text: str, config: ExtractorConfig = DEFAULT_CONFIG) -> Optional[FieldMatch]:
    return _first_match(DURATION_STRATEGIES, text, config)

def duration_to_days(duration: str) -> Optional[int]:
    """'4 weeks' -> 28, '1 month' -> 30; None when no count/unit is present."""
    m = re.search(r"(\d+)\s*(day|week|month)", duration or "", re.I)
    if not m:
        return None
    return int(m.group(1)) * _DAYS_PER_UNIT[m.group(2).lower()]


# ---------------------------
# Quantity
# ---------------------------
def _fraction_quantity(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    m = re.search(rf"(\d+)/(\d+)\s*({_alternation(config.quantity_units)})", text, re.I)
    if not m:
        return None
    return FieldMatch(f"{m.group(1)}/{m.group(2)}{m.group(3).lower()}", m.span())

def _whole_quantity(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    # never start on a fraction's denominator (or inside another number)
    m = re.search(rf"(?<![/\d])(\d+)\s*({_alternation(config.quantity_units)})\b", text, re.I)
    if not m:
        return None
    return FieldMatch(f"{m.group(1)}{m.group(2).lower()}", m.span())

QUANTITY_STRATEGIES: Tuple[Strategy, ...] = (_fraction_quantity, _whole_quantity)

def extract_quantity(text: str, config: ExtractorConfig = DEFAULT_CONFIG) -> Optional[FieldMatch]:
    return _first_match(QUANTITY_STRATEGIES, text, config)


# ---------------------------
# Dose form (+ dose per intake)
# ---------------------------
def _counted_dose_form(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    m = re.search(rf"(\d+)\s*({_alternation(config.counted_dose_forms)})\b", text, re.I)
    if not m:
        return None
    return FieldMatch(m.group(2).lower(), m.span(), extra=m.group(1))

def _plain_dose_form(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    m = re.search(rf"\b({_alternation(config.dose_forms())})\b", text, re.I)
    if not m:
        return None
    return FieldMatch(m.group(1).lower(), m.span())

DOSE_FORM_STRATEGIES: Tuple[Strategy, ...] = (_counted_dose_form, _plain_dose_form)

def extract_dose_form(text: str, config: ExtractorConfig = DEFAULT_CONFIG) -> Optional[FieldMatch]:
    return _first_match(DOSE_FORM_STRATEGIES, text, config)


# ---------------------------
# Dose pattern / frequency
# ---------------------------
def derive_frequency(pattern: str) -> str:
    """
    Frequency is never parsed on its own: it is the count of non-zero
    segments of a numeric pattern (1->OD .. 4->QID), or the keyword itself
    for SOS/Weekly/Monthly. Anything else derives to "".
    """
    pattern = (pattern or "").strip()
    if pattern in KEYWORD_PATTERNS:
        return pattern
    segments = pattern.split("-")
    if not pattern or not all(s.isdigit() for s in segments):
        return ""
    non_zero = sum(1 for s in segments if int(s) > 0)
    return FREQUENCY_BY_COUNT.get(non_zero, "")

def _numeric_pattern(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    m = re.search(r"\b(\d+)-(\d+)-(\d+)\b", text)
    if not m:
        return None
    pattern = "-".join(m.groups())
    return FieldMatch(pattern, m.span(), extra=derive_frequency(pattern))

def _keyword_pattern(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    # first keyword found wins; keywords are never combined
    for keyword, (pattern, frequency) in config.frequency_table.items():
        m = re.search(rf"\b{re.escape(keyword)}\b", text, re.I)
        if m:
            return FieldMatch(pattern, m.span(), extra=frequency)
    return None

DOSE_PATTERN_STRATEGIES: Tuple[Strategy, ...] = (_numeric_pattern, _keyword_pattern)

def extract_dose_pattern(text: str, config: ExtractorConfig = DEFAULT_CONFIG) -> Optional[FieldMatch]:
    return _first_match(DOSE_PATTERN_STRATEGIES, text, config)


# ---------------------------
# Potency
# ---------------------------
def _potency(text: str, config: ExtractorConfig) -> Optional[FieldMatch]:
    m = re.search(rf"\b(\d+)\s*({_alternation(config.potency_suffixes)})\b", text, re.I)
    if not m:
        return None
    return FieldMatch(f"{m.group(1)}{m.group(2).upper()}", m.span())

POTENCY_STRATEGIES: Tuple[Strategy, ...] = (_potency,)

def extract_potency(text: str, config: ExtractorConfig = DEFAULT_CONFIG) -> Optional[FieldMatch]:
    return _first_match(POTENCY_STRATEGIES, text, config)
