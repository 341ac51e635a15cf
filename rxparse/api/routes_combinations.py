# rxparse/api/routes_combinations.py
import sqlite3
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from rxparse.api.deps import get_db
from rxparse.db import combination_store, medicine_store
from rxparse.schemas.models import (
    AutocompleteResponse,
    CombinationMedicine, CombinationUpsert, CombinationUpsertResult,
    RegisterCombinationRequest, RegisterCombinationResponse,
)
from rxparse.services.autocomplete import suggest
from rxparse.services.combinations import register_combination

router = APIRouter(tags=["combinations"])

@router.get("/combinations", response_model=List[CombinationMedicine])
def list_combinations(conn: sqlite3.Connection = Depends(get_db)):
    return combination_store.list_all(conn)

@router.post("/combinations", response_model=CombinationUpsertResult)
def upsert_combination(req: CombinationUpsert, conn: sqlite3.Connection = Depends(get_db)):
    return combination_store.upsert(conn, req)

@router.delete("/combinations/{combo_id}")
def delete_combination(combo_id: int, conn: sqlite3.Connection = Depends(get_db)):
    if not combination_store.delete(conn, combo_id):
        raise HTTPException(status_code=404, detail="Combination not found")
    return {"ok": True}

@router.post("/combinations/register", response_model=RegisterCombinationResponse)
def register_from_medicine_name(req: RegisterCombinationRequest, conn: sqlite3.Connection = Depends(get_db)):
    result = register_combination(conn, req.medicine_name)
    return RegisterCombinationResponse(registered=result is not None, result=result)

@router.get("/medicines/autocomplete", response_model=AutocompleteResponse)
def autocomplete(q: str = "", conn: sqlite3.Connection = Depends(get_db)):
    return suggest(conn, q)

@router.post("/medicines/seed")
def seed(conn: sqlite3.Connection = Depends(get_db)):
    return {"ok": True, "seeded": medicine_store.seed_defaults(conn)}
