from llm.dispatcher import Dispatcher, parse_max_tokens, parse_timeout, resolve_model
from llm.errors import (
    InvalidProvider,
    InvalidRequest,
    InvalidResponse,
    LLMError,
    MissingConfiguration,
    TransportError,
)
from llm.factory import create_dispatcher
from llm.registry import PROVIDERS, AuthScheme, ProviderSpec, get_provider, provider_names

__all__ = [
    "Dispatcher",
    "create_dispatcher",
    "parse_max_tokens",
    "parse_timeout",
    "resolve_model",
    "LLMError",
    "InvalidProvider",
    "InvalidRequest",
    "InvalidResponse",
    "MissingConfiguration",
    "TransportError",
    "PROVIDERS",
    "AuthScheme",
    "ProviderSpec",
    "get_provider",
    "provider_names",
]
