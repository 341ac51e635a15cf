# rxparse/services/rules.py
"""
Operator-maintained smart parsing rules.

A rule is plain data; everything here is a pure function of (rules, text).
The caller decides when to run them: as a per-field normalization step
after a parse, or to pull field values straight out of a one-line entry.
"""
import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern

from rxparse.schemas.models import FIELD_TYPES, SmartParsingRule
from rxparse.services.field_extractors import duration_to_days

logger = logging.getLogger(__name__)

_BACKREF_RE = re.compile(r"\$(\d+)")
# "4 pills TDS" means 4-4-4, whatever the dose pattern rules say
_COUNTED_TDS_RE = re.compile(r"(\d+)\s*pills?\s*TDS", re.I)


def list_active_rules(rules: Iterable[SmartParsingRule], field_type: str) -> List[SmartParsingRule]:
    """Active rules for one field, highest priority first; ties keep their input order."""
    active = [r for r in rules if r.is_active and r.field_type == field_type]
    return sorted(active, key=lambda r: r.priority, reverse=True)


def compile_rule(rule: SmartParsingRule) -> Optional[Pattern[str]]:
    """Case-insensitive matcher for a rule, or None when the rule cannot be used."""
    if not rule.pattern:
        return None
    source = rule.pattern if rule.is_regex else re.escape(rule.pattern)
    try:
        return re.compile(source, re.I)
    except re.error as e:
        logger.warning("skipping rule %s (%r): invalid pattern %r: %s", rule.id, rule.name, rule.pattern, e)
        return None


def expand_replacement(replacement: str, match: "re.Match[str]") -> str:
    """Expand $1, $2... from `match`; unknown or unmatched groups become ""."""
    def _group(ref: "re.Match[str]") -> str:
        n = int(ref.group(1))
        if n > match.re.groups:
            return ""
        return match.group(n) or ""

    return _BACKREF_RE.sub(_group, replacement)


def apply_rule(rule: SmartParsingRule, text: str) -> str:
    """Replace every occurrence of the rule's pattern in `text`."""
    if not rule.is_active:
        return text
    pattern = compile_rule(rule)
    if pattern is None:
        return text
    if rule.is_regex:
        return pattern.sub(lambda m: expand_replacement(rule.replacement, m), text)
    return pattern.sub(lambda m: rule.replacement, text)


def apply_rules(rules: Iterable[SmartParsingRule], field_type: str, text: str) -> str:
    """Run every active rule of `field_type` over `text`, in priority order."""
    for rule in list_active_rules(rules, field_type):
        text = apply_rule(rule, text)
    return text


def match_field(rules: Iterable[SmartParsingRule], field_type: str, text: str) -> Optional[str]:
    """Value produced by the first active rule of `field_type` that matches `text`."""
    for rule in list_active_rules(rules, field_type):
        pattern = compile_rule(rule)
        if pattern is None:
            continue
        m = pattern.search(text)
        if not m:
            continue
        return expand_replacement(rule.replacement, m) if rule.is_regex else rule.replacement
    return None


def apply_entry_rules(text: str, rules: Iterable[SmartParsingRule]) -> Dict[str, str]:
    """
    Field overrides for a one-line entry: {field_type: value} for every field
    some rule matched. Fields no rule matches are absent.
    """
    rules = list(rules)
    overrides: Dict[str, str] = {}
    for field_type in FIELD_TYPES:
        if field_type == "dosePattern":
            tds = _COUNTED_TDS_RE.search(text)
            if tds:
                n = tds.group(1)
                overrides[field_type] = f"{n}-{n}-{n}"
                continue
        value = match_field(rules, field_type, text)
        if value is not None:
            overrides[field_type] = value
    return overrides


def override_duration_days(duration: str) -> Optional[int]:
    """Days for a duration override; a bare number counts as days."""
    days = duration_to_days(duration)
    if days is not None:
        return days
    m = re.match(r"\s*(\d+)", duration or "")
    return int(m.group(1)) if m else None
