import os

from rxparse.core.env import load_env

load_env()

# "groq" talks to any OpenAI-compatible /chat/completions endpoint, "hf" uses huggingface_hub
AI_PROVIDER = os.getenv("AI_PROVIDER", "groq").strip().lower() or "groq"

AI_BASE_URL = os.getenv("AI_BASE_URL", "https://api.groq.com/openai/v1")
AI_MODEL = os.getenv("AI_MODEL", "llama-3.3-70b-versatile")
HF_MODEL = os.getenv("HF_MODEL", "meta-llama/Llama-3.3-70B-Instruct")
HF_PROVIDER = os.getenv("HF_PROVIDER", "auto").strip() or "auto"

AI_TEMPERATURE = float(os.getenv("AI_TEMPERATURE", "0.1"))
AI_MAX_TOKENS = int(os.getenv("AI_MAX_TOKENS", "300"))
AI_TIMEOUT_S = float(os.getenv("AI_TIMEOUT_S", "20"))

USE_AI_PARSING = os.getenv("USE_AI_PARSING", "false").lower() == "true"
AI_API_KEY = os.getenv("AI_API_KEY", "").strip()
