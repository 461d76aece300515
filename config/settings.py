"""
Configuration. API keys, URLs and token limits come from the environment,
optionally seeded from a dotenv file.

Per provider, three variables (NAME is the upper-cased provider name):
    NAME_API_KEY     credential (not needed for ollama)
    NAME_API_URL     endpoint override
    NAME_MAX_TOKENS  default token limit
    NAME_MODEL       default model for that provider

Process-wide:
    DEFAULT_LLM, DEFAULT_MODEL, LLM_REQUEST_TIMEOUT, ASK_LLM_CONFIG
"""

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

log = logging.getLogger(__name__)

CONFIG_FILE_VAR = "ASK_LLM_CONFIG"

# Config.get() field name -> env var suffix
FIELD_SUFFIXES = {
    "api_key": "API_KEY",
    "api_url": "API_URL",
    "max_tokens": "MAX_TOKENS",
    "model": "MODEL",
}


def env_var_name(provider: str, field_name: str) -> str:
    suffix = FIELD_SUFFIXES.get(field_name)
    if suffix is None:
        raise KeyError(f"Unknown config field: '{field_name}'")
    return f"{provider.upper()}_{suffix}"


@dataclass
class Config:
    # Provider used when --provider is not given
    default_llm: str = ""
    # Model used when neither --model nor NAME_MODEL is set
    default_model: str = ""
    # Seconds. None leaves requests without a timeout.
    request_timeout: float | None = None
    # Raw key/value lookup table, normally a snapshot of os.environ
    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        env = dict(os.environ if environ is None else environ)
        timeout = env.get("LLM_REQUEST_TIMEOUT", "").strip()
        request_timeout = float(timeout) if timeout else None
        if request_timeout is not None and not (math.isfinite(request_timeout) and request_timeout > 0):
            raise ValueError(f"LLM_REQUEST_TIMEOUT must be a positive number of seconds, got {timeout!r}")
        return cls(
            default_llm=env.get("DEFAULT_LLM", "").strip(),
            default_model=env.get("DEFAULT_MODEL", "").strip(),
            request_timeout=request_timeout,
            values=env,
        )

    def get(self, provider: str, field_name: str) -> str | None:
        """Per-provider lookup. Blank values count as absent."""
        value = self.values.get(env_var_name(provider, field_name), "")
        value = value.strip()
        return value or None


def load_config(env_file: str | Path | None = None) -> Config:
    """
    Load a dotenv file (if any) into the environment, then snapshot it.

    Lookup order for the file: explicit argument, $ASK_LLM_CONFIG, then a
    .env found by python-dotenv. Real environment variables always win.
    """
    path = env_file or os.environ.get(CONFIG_FILE_VAR)
    if path:
        path = Path(path).expanduser()
        if not path.is_file():
            log.warning(f"Config file not found: {path}")
        else:
            load_dotenv(path, override=False)
            log.debug(f"Loaded config from {path}")
    else:
        load_dotenv(override=False)
    return Config.from_env()
