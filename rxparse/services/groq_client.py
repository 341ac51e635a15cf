from typing import Any, Dict, Optional

import requests

from rxparse.core.llm_config import (
    AI_BASE_URL,
    AI_MAX_TOKENS,
    AI_TEMPERATURE,
    AI_TIMEOUT_S,
)
from rxparse.services.llm.json_reply import parse_json_reply

class GroqError(RuntimeError):
    pass

def groq_chat_json(
    *,
    model: str,
    system: str,
    user: str,
    api_key: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    timeout_s: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Calls an OpenAI-compatible /chat/completions endpoint (Groq by default)
    and returns the JSON object in the assistant message content.
    Transport problems surface as requests exceptions, everything else as GroqError.
    """
    url = f"{AI_BASE_URL.rstrip('/')}/chat/completions"
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload: Dict[str, Any] = {
        "model": model,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        "temperature": temperature if temperature is not None else AI_TEMPERATURE,
        "max_tokens": max_tokens if max_tokens is not None else AI_MAX_TOKENS,
        "response_format": {"type": "json_object"},
    }

    r = requests.post(url, headers=headers, json=payload, timeout=timeout_s or AI_TIMEOUT_S)
    if r.status_code >= 400:
        raise GroqError(f"LLM {r.status_code}: {r.text[:300]}")

    try:
        data = r.json()
    except ValueError as e:
        raise GroqError(f"Non-JSON response body: {r.text[:200]}...") from e

    if not isinstance(data, dict):
        raise GroqError(f"Unexpected response body: {r.text[:200]}...")

    choices = data.get("choices") or []
    choice = choices[0] if isinstance(choices, list) and choices else {}
    message = choice.get("message") if isinstance(choice, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not content or not isinstance(content, str):
        raise GroqError("No content in LLM response")
    return parse_json_reply(content, GroqError)
