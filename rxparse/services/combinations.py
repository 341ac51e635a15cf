# rxparse/services/combinations.py
"""
Auto-registration of "A + B + C" medicine strings as reusable combinations.

Two shapes are recognized in a finalized medicine-name field:

    "BCR (Bryonia + Causticum + Rhus Tox)"  -> name BCR, content in parentheses
    "Arnica + Belladonna + Calendula"       -> name ABC (initials), content verbatim
"""
import logging
import re
import sqlite3
from dataclasses import dataclass
from typing import Optional

from rxparse.db import combination_store
from rxparse.schemas.models import CombinationUpsert, CombinationUpsertResult

logger = logging.getLogger(__name__)

_CODED_RE = re.compile(r"^([A-Z]{2,})\s*\((.+)\)\s*$")


@dataclass(frozen=True)
class CombinationCandidate:
    short_name: str
    content: str


def synthesize_short_name(content: str) -> str:
    """First letter of each '+'-separated part, uppercased: 'Arnica + Belladonna' -> 'AB'."""
    parts = [p.strip() for p in content.split("+")]
    return "".join(p[0].upper() for p in parts if p)


def _has_two_parts(content: str) -> bool:
    return len([p for p in content.split("+") if p.strip()]) >= 2


def detect_combination(medicine_name: str) -> Optional[CombinationCandidate]:
    name = (medicine_name or "").strip()
    if "+" not in name:
        return None

    coded = _CODED_RE.match(name)
    if coded:
        content = coded.group(2).strip()
        if not _has_two_parts(content):
            return None
        return CombinationCandidate(short_name=coded.group(1), content=content)

    if not _has_two_parts(name):
        return None
    return CombinationCandidate(short_name=synthesize_short_name(name), content=name)


def register_combination(conn: sqlite3.Connection, medicine_name: str) -> Optional[CombinationUpsertResult]:
    """
    Persist the combination behind `medicine_name` the first time it is seen.

    Returns None when the name is not a combination. A combination already
    known by short name or by content is returned untouched (created=False);
    overwriting is left to the explicit upsert endpoint.
    """
    candidate = detect_combination(medicine_name)
    if candidate is None:
        return None

    existing = (
        combination_store.get_by_name(conn, candidate.short_name)
        or combination_store.get_by_content(conn, candidate.content)
    )
    if existing:
        return CombinationUpsertResult(combination=existing, created=False)

    result = combination_store.upsert(
        conn, CombinationUpsert(name=candidate.short_name, content=candidate.content)
    )
    logger.info("registered combination %s = %s", candidate.short_name, candidate.content)
    return result
