# rxparse/agent/nodes.py
from typing import Any, Dict

from rxparse.agent.state import ParseState
from rxparse.services.extraction import heuristic_parse
from rxparse.services.llm.ai_parser import AIParseOk, ai_parse

def _audit(state: ParseState, event: str, extra: Dict[str, Any] | None = None) -> Dict[str, Any]:
    audit = list(state.get("audit") or [])
    audit.append({"event": event, **(extra or {})})
    return {"audit": audit}

def route_start(state: ParseState) -> str:
    # AI goes first only when enabled, with a credential and something to parse
    if not state.get("use_ai"):
        return "heuristic"
    if not (state.get("api_key") or "").strip():
        return "heuristic"
    if not (state.get("raw_text") or "").strip():
        return "heuristic"
    return "ai"

def ai_node(state: ParseState) -> Dict[str, Any]:
    result = ai_parse(state.get("raw_text") or "", state.get("api_key") or "", state.get("timeout_s"))

    if isinstance(result, AIParseOk):
        return {
            "success": True,
            "data": result.data.model_dump(),
            "method": "ai",
            **_audit(state, "parse.ai.done", {"confidence": result.data.confidence}),
        }

    return {
        "success": False,
        "ai_error": result.reason,
        **_audit(state, "parse.ai.fallback", {"reason": result.reason}),
    }

def route_after_ai(state: ParseState) -> str:
    return "done" if state.get("success") else "heuristic"

def heuristic_node(state: ParseState) -> Dict[str, Any]:
    rx = heuristic_parse(state.get("raw_text") or "")

    if rx is None:
        return {
            "success": False,
            "data": None,
            "method": None,
            "error": "Input is empty",
            **_audit(state, "parse.heuristic.empty"),
        }

    if not rx.medicine_name:
        return {
            "success": False,
            "data": None,
            "method": None,
            "error": "No medicine name found",
            **_audit(state, "parse.heuristic.no_name"),
        }

    return {
        "success": True,
        "data": rx.model_dump(),
        "method": "regex",
        **_audit(state, "parse.heuristic.done", {"medicine_name": rx.medicine_name}),
    }
