from typing import Optional

from rxparse.agent.graph import parse_graph
from rxparse.core.llm_config import AI_API_KEY, USE_AI_PARSING
from rxparse.schemas.models import ParseResponse, StructuredPrescription

def parse_prescription(
    text: str,
    use_ai: Optional[bool] = None,
    api_key: Optional[str] = None,
    timeout_s: Optional[float] = None,
) -> ParseResponse:
    """
    AI first (when enabled and a credential is available), heuristic otherwise
    or when the AI attempt fails. `use_ai`/`api_key` default to the
    USE_AI_PARSING / AI_API_KEY settings.
    """
    initial_state = {
        "raw_text": text or "",
        "use_ai": USE_AI_PARSING if use_ai is None else use_ai,
        "api_key": (api_key or AI_API_KEY or "").strip(),
        "timeout_s": timeout_s,
        "audit": [],
    }

    result = parse_graph.invoke(initial_state)

    if not result.get("success"):
        return ParseResponse(success=False, error=result.get("error") or "Failed to parse prescription")

    return ParseResponse(
        success=True,
        data=StructuredPrescription(**result["data"]),
        method=result.get("method"),
    )
