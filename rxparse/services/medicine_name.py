# rxparse/services/medicine_name.py
import re
from typing import List

from rxparse.services.field_extractors import DEFAULT_CONFIG, ExtractorConfig

_FRACTION_START_RE = re.compile(r"^\d+/\d+")
_PATTERN_WORD_RE = re.compile(r"^\d+-\d+-\d+$")


def _is_fused_potency(word: str, config: ExtractorConfig) -> bool:
    suffixes = "|".join(re.escape(s) for s in config.potency_suffixes)
    return re.match(rf"^\d+({suffixes})$", word, re.I) is not None


def _is_potency_number(word: str, next_word: str, potency: str, config: ExtractorConfig) -> bool:
    """A bare integer that is (probably) a potency rather than part of the name."""
    if not word.isdigit():
        return False
    if next_word and next_word.lower() in config.potency_suffixes:
        return True
    return int(word) in config.typical_potencies and not potency


def _is_stop_word(words: List[str], i: int, potency: str, config: ExtractorConfig) -> bool:
    word = words[i]
    next_word = words[i + 1] if i + 1 < len(words) else ""

    if _is_fused_potency(word, config):
        return True
    if _FRACTION_START_RE.match(word):
        return True
    if _is_potency_number(word, next_word, potency, config):
        return True
    if word.lower() in config.stop_words():
        return True
    return _PATTERN_WORD_RE.match(word) is not None


def title_case_name(name: str) -> str:
    """'ars ALB' -> 'Ars Alb'"""
    return " ".join(w.capitalize() for w in name.split(" "))


def extract_medicine_name(text: str, potency: str = "", config: ExtractorConfig = DEFAULT_CONFIG) -> str:
    """
    Consume words from the start of the (case-preserved) line until one of
    them looks like potency, quantity, dose form, frequency, duration or a
    dose pattern. Returns "" when the very first word already stops the scan.

    `potency` is what the potency extractor found anywhere in the line; while
    it is empty a bare typical-potency number (200, 1000...) ends the name.
    """
    words = text.split()
    taken: List[str] = []
    for i in range(len(words)):
        if _is_stop_word(words, i, potency, config):
            break
        taken.append(words[i])

    return title_case_name(" ".join(taken)) if taken else ""
