import json
from typing import Any, Dict, Type

def parse_json_reply(text: str, error_cls: Type[Exception]) -> Dict[str, Any]:
    """
    JSON from a model reply, tolerating prose or code fences around the
    object. Raises `error_cls` when no JSON can be recovered.
    """
    text = (text or "").strip()
    try:
        return json.loads(text)
    except ValueError:
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except ValueError:
            pass

    raise error_cls(f"Invalid JSON from LLM: {text[:200]}...")
