from typing import Any, Dict, List, Optional, TypedDict

class ParseState(TypedDict, total=False):
    # inputs
    raw_text: str
    use_ai: bool
    api_key: str
    timeout_s: Optional[float]

    # outputs
    success: bool
    data: Optional[Dict[str, Any]]  # StructuredPrescription dict
    method: Optional[str]           # "ai" | "regex"
    error: Optional[str]
    ai_error: Optional[str]         # why the AI attempt fell back
    audit: List[Dict[str, Any]]
