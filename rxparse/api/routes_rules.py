# rxparse/api/routes_rules.py
import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from rxparse.api.deps import get_db
from rxparse.db import rule_store
from rxparse.schemas.models import (
    ApplyRulesRequest, ApplyRulesResponse,
    FieldType,
    NormalizeFieldRequest, NormalizeFieldResponse,
    RuleCreate, RuleUpdate, SmartParsingRule,
)
from rxparse.services.rules import apply_entry_rules, apply_rules, override_duration_days

router = APIRouter(prefix="/smart-parsing", tags=["smart-parsing"])

@router.get("", response_model=List[SmartParsingRule])
def list_rules(field_type: Optional[FieldType] = None, conn: sqlite3.Connection = Depends(get_db)):
    # with a field_type only the active rules for it are returned, in evaluation order
    if field_type:
        return rule_store.list_active(conn, field_type)
    return rule_store.list_rules(conn)

@router.post("", response_model=SmartParsingRule)
def create_rule(req: RuleCreate, conn: sqlite3.Connection = Depends(get_db)):
    return rule_store.create_rule(conn, req)

@router.put("/{rule_id}", response_model=SmartParsingRule)
def update_rule(rule_id: str, req: RuleUpdate, conn: sqlite3.Connection = Depends(get_db)):
    updated = rule_store.update_rule(conn, rule_id, req)
    if updated is None:
        raise HTTPException(status_code=404, detail="Rule not found")
    return updated

@router.delete("/{rule_id}")
def delete_rule(rule_id: str, conn: sqlite3.Connection = Depends(get_db)):
    if not rule_store.delete_rule(conn, rule_id):
        raise HTTPException(status_code=404, detail="Rule not found")
    return {"ok": True, "message": "Rule deleted"}

@router.post("/apply", response_model=ApplyRulesResponse)
def apply_to_entry(req: ApplyRulesRequest, conn: sqlite3.Connection = Depends(get_db)):
    overrides = apply_entry_rules(req.text, rule_store.list_rules(conn))
    duration = overrides.get("duration")
    return ApplyRulesResponse(
        overrides=overrides,
        duration_days=override_duration_days(duration) if duration else None,
    )

@router.post("/normalize", response_model=NormalizeFieldResponse)
def normalize_field(req: NormalizeFieldRequest, conn: sqlite3.Connection = Depends(get_db)):
    text = apply_rules(rule_store.list_rules(conn), req.field_type, req.text)
    return NormalizeFieldResponse(field_type=req.field_type, text=text)
