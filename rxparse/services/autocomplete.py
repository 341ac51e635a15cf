import sqlite3

from rxparse.db import combination_store, medicine_store
from rxparse.schemas.models import AutocompleteResponse, MedicineSuggestion

SUGGESTION_LIMIT = 10

def suggest(conn: sqlite3.Connection, prefix: str, limit: int = SUGGESTION_LIMIT) -> AutocompleteResponse:
    """Medicines and combinations whose name (or combination content) contains `prefix`."""
    if not (prefix or "").strip():
        return AutocompleteResponse()

    medicines = [MedicineSuggestion(name=n) for n in medicine_store.search(conn, prefix, limit)]
    combinations = [
        MedicineSuggestion(name=c.name, kind="combination", content=c.content, description=c.description)
        for c in combination_store.search(conn, prefix, limit)
    ]
    return AutocompleteResponse(medicines=medicines, combinations=combinations)
