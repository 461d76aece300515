"""
Core data types. No behavior, just shapes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from llm.registry import ProviderSpec


@dataclass
class RequestConfig:
    """One invocation's resolved selections."""
    provider: ProviderSpec
    model: str
    prompt: str             # piped input + CLI text, joined by a blank line
    max_tokens: int         # override, else the provider's configured default


@dataclass
class OutboundRequest:
    """A fully built POST, ready to send."""
    provider: str
    url: str                # endpoint with the model filled in, no query string
    body: dict
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)   # gemini's ?key=
