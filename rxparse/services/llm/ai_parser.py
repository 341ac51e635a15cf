# rxparse/services/llm/ai_parser.py
import logging
from dataclasses import dataclass
from typing import Optional, Union

import requests

from rxparse.core.llm_config import AI_MODEL, AI_PROVIDER, AI_TIMEOUT_S, HF_MODEL
from rxparse.schemas.models import StructuredPrescription
from rxparse.services.groq_client import GroqError, groq_chat_json
from rxparse.services.hf_client import HFLLMError, hf_chat_json
from rxparse.services.llm.prescription_prompt import PARSE_SYSTEM_PROMPT
from rxparse.services.llm.prescription_sanitize import sanitize_ai_prescription
from rxparse.services.llm.prescription_schema import RX_SCHEMA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AIParseOk:
    data: StructuredPrescription


@dataclass(frozen=True)
class AIParseErr:
    reason: str


AIParseResult = Union[AIParseOk, AIParseErr]


def _call_model(text: str, api_key: str, timeout_s: float) -> dict:
    if AI_PROVIDER == "hf":
        return hf_chat_json(
            model=HF_MODEL,
            system=PARSE_SYSTEM_PROMPT,
            user=text,
            api_key=api_key,
            schema=RX_SCHEMA,
            timeout_s=timeout_s,
        )
    return groq_chat_json(
        model=AI_MODEL,
        system=PARSE_SYSTEM_PROMPT,
        user=text,
        api_key=api_key,
        timeout_s=timeout_s,
    )


def ai_parse(text: str, api_key: str, timeout_s: Optional[float] = None) -> AIParseResult:
    """
    One attempt at an AI parse of `text`. Never raises: transport errors,
    timeouts, HTTP errors, missing content and bad JSON all come back as
    AIParseErr so the caller can fall back to the heuristic parser.
    """
    if not (text or "").strip():
        return AIParseErr("empty input")
    if not (api_key or "").strip():
        return AIParseErr("no credential")

    try:
        raw = _call_model(text.strip(), api_key.strip(), timeout_s or AI_TIMEOUT_S)
        rx = sanitize_ai_prescription(raw)
    except requests.Timeout as e:
        logger.info("AI parse timed out, falling back: %s", e)
        return AIParseErr(f"timeout: {e}")
    except (requests.RequestException, GroqError, HFLLMError, ValueError) as e:
        logger.info("AI parse failed, falling back: %s", e)
        return AIParseErr(str(e))

    if not rx.medicine_name:
        logger.info("AI parse returned no medicine name, falling back")
        return AIParseErr("no medicine name in AI response")
    return AIParseOk(rx)
