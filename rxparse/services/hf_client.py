from typing import Any, Dict, Optional

from huggingface_hub import InferenceClient

from rxparse.core.llm_config import (
    AI_MAX_TOKENS,
    AI_TEMPERATURE,
    AI_TIMEOUT_S,
    HF_PROVIDER,
)
from rxparse.services.llm.json_reply import parse_json_reply

class HFLLMError(RuntimeError):
    pass

def hf_chat_json(
    *,
    model: str,
    system: str,
    user: str,
    api_key: str,
    schema: Optional[Dict[str, Any]] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    timeout_s: Optional[float] = None,
) -> Dict[str, Any]:
    client = InferenceClient(
        provider=HF_PROVIDER,
        api_key=api_key,
        timeout=float(timeout_s or AI_TIMEOUT_S),
    )

    messages = [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]

    if schema:
        response_format = {
            "type": "json_schema",
            "json_schema": {
                "name": "StructuredPrescription",
                "schema": schema,
                "strict": True,
            },
        }
    else:
        response_format = {"type": "json_object"}

    try:
        out = client.chat_completion(
            model=model,
            messages=messages,
            temperature=temperature if temperature is not None else AI_TEMPERATURE,
            max_tokens=max_tokens if max_tokens is not None else AI_MAX_TOKENS,
            response_format=response_format,
        )
    except Exception as e:
        # huggingface_hub raises transport, timeout and HTTP errors from several hierarchies
        raise HFLLMError(f"Inference call failed: {e}") from e

    content = out.choices[0].message.content if out.choices else ""
    if not content:
        raise HFLLMError("No content in model response")
    return parse_json_reply(content, HFLLMError)
