import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[2]  # repo root

def env_file() -> Path:
    """config.env at the repo root, unless RXPARSE_ENV_FILE points elsewhere."""
    return Path(os.getenv("RXPARSE_ENV_FILE") or ROOT_DIR / "config.env")

def load_env(path: Optional[Path] = None) -> bool:
    # variables already set in the process environment always win
    return load_dotenv(dotenv_path=path or env_file(), override=False)
