"""
Provider registry. One ProviderSpec per supported vendor.

Each ProviderSpec answers three questions for the dispatcher:
- where to send the request and how to authenticate,
- what the request body looks like,
- where the generated text lives in the response.

No provider-specific literals exist outside this module. The table is
built once at import and is read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable

from llm.errors import InvalidProvider


class AuthScheme(Enum):
    BEARER = "bearer"            # Authorization: Bearer <key>
    QUERY_PARAM = "query_param"  # ?key=<key>
    NONE = "none"                # no credential sent


# Query parameter name used by QUERY_PARAM auth
API_KEY_PARAM = "key"

MODEL_PLACEHOLDER = "{model}"

BodyBuilder = Callable[[str, str, int | None], dict]


@dataclass(frozen=True)
class ProviderSpec:
    name: str
    endpoint_template: str
    auth: AuthScheme
    build_body: BodyBuilder
    extract_path: tuple[str | int, ...]
    requires_api_key: bool = True
    extra_headers: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    def auth_for(self, api_key: str | None) -> AuthScheme:
        """The scheme actually used: keyless providers fall back to NONE."""
        if not api_key and not self.requires_api_key:
            return AuthScheme.NONE
        return self.auth

    def endpoint(self, model: str, template: str | None = None) -> str:
        """Fill the model into the endpoint template (a no-op for most providers)."""
        return (template or self.endpoint_template).replace(MODEL_PLACEHOLDER, model)

    def extract_text(self, data: Any) -> str | None:
        """
        Walk extract_path through the parsed response.

        Returns None when any step is missing or the leaf is not a
        non-empty string. The text itself is returned untouched.
        """
        node = data
        for step in self.extract_path:
            if isinstance(step, int):
                if not isinstance(node, list) or len(node) <= step:
                    return None
            elif not isinstance(node, dict) or step not in node:
                return None
            node = node[step]
        if not isinstance(node, str) or node == "":
            return None
        return node


# ──────────────────────────────────────────────
# Body shapes
# ──────────────────────────────────────────────

def chat_body(model: str, prompt: str, max_tokens: int | None = None) -> dict:
    """OpenAI-style chat completion body, shared by most vendors."""
    body = {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
    }
    if max_tokens is not None:
        body["max_tokens"] = max_tokens
    return body


def gemini_body(model: str, prompt: str, max_tokens: int | None = None) -> dict:
    # Model travels in the URL path, not the body
    generation_config = {"responseMimeType": "text/plain"}
    if max_tokens is not None:
        generation_config["maxOutputTokens"] = max_tokens
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }


def ollama_body(model: str, prompt: str, max_tokens: int | None = None) -> dict:
    body = {"model": model, "prompt": prompt}
    if max_tokens is not None:
        body["max_tokens"] = max_tokens
    body["stream"] = False
    return body


CHAT_TEXT_PATH = ("choices", 0, "message", "content")


def _chat_provider(name: str, endpoint: str) -> ProviderSpec:
    return ProviderSpec(
        name=name,
        endpoint_template=endpoint,
        auth=AuthScheme.BEARER,
        build_body=chat_body,
        extract_path=CHAT_TEXT_PATH,
    )


_SPECS = [
    _chat_provider("chatgpt", "https://api.openai.com/v1/chat/completions"),
    ProviderSpec(
        name="claude",
        endpoint_template="https://api.anthropic.com/v1/messages",
        auth=AuthScheme.BEARER,
        build_body=chat_body,
        extract_path=("content", 0, "text"),
        extra_headers=MappingProxyType({"anthropic-version": "2023-06-01"}),
    ),
    ProviderSpec(
        name="gemini",
        endpoint_template=(
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "{model}:streamGenerateContent"
        ),
        auth=AuthScheme.QUERY_PARAM,
        build_body=gemini_body,
        # streamGenerateContent answers with a list of chunks; only the first is read
        extract_path=(0, "candidates", 0, "content", "parts", 0, "text"),
    ),
    _chat_provider("deepseek", "https://api.deepseek.com/chat/completions"),
    _chat_provider("mistral", "https://api.mistral.ai/v1/chat/completions"),
    _chat_provider("grok", "https://api.x.ai/v1/chat/completions"),
    ProviderSpec(
        name="ollama",
        endpoint_template="http://localhost:11434/api/generate",
        auth=AuthScheme.BEARER,
        build_body=ollama_body,
        extract_path=("response",),
        requires_api_key=False,
    ),
    _chat_provider("openrouter", "https://openrouter.ai/api/v1/chat/completions"),
    _chat_provider("groq", "https://api.groq.com/openai/v1/chat/completions"),
]

PROVIDERS: MappingProxyType = MappingProxyType({spec.name: spec for spec in _SPECS})


def provider_names() -> tuple[str, ...]:
    return tuple(PROVIDERS)


def get_provider(name: str) -> ProviderSpec:
    """Exact, case-sensitive lookup. Raises InvalidProvider for anything else."""
    spec = PROVIDERS.get(name)
    if spec is None:
        raise InvalidProvider(name, provider_names())
    return spec
