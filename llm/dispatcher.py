"""
Request dispatcher. Turns (provider, model, prompt, max_tokens) into one
HTTP POST and returns the generated text.

Everything that can be checked without the network is checked first:
provider name, prompt, token limit, credentials, endpoint. Only then is
the request sent. There is no retry and nothing is cached.
"""

import json
import logging
import math

import requests

from config.settings import Config, env_var_name
from llm.errors import (
    InvalidRequest,
    InvalidResponse,
    MissingConfiguration,
    TransportError,
)
from llm.registry import API_KEY_PARAM, AuthScheme, ProviderSpec, get_provider
from models import OutboundRequest, RequestConfig

log = logging.getLogger(__name__)


def parse_max_tokens(value, provider: str = "") -> int:
    """Accept a positive integer (or its decimal string form)."""
    if isinstance(value, bool):
        raise InvalidRequest(provider, f"max tokens must be a positive integer, got {value!r}")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidRequest(provider, f"max tokens must be a positive integer, got {value!r}")
    if not isinstance(value, int) or value <= 0:
        raise InvalidRequest(provider, f"max tokens must be a positive integer, got {value!r}")
    return value


def parse_timeout(value, provider: str = "") -> float:
    """Seconds as a finite, positive number (or its string form)."""
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise InvalidRequest(provider, f"timeout must be a positive number of seconds, got {value!r}")
    if isinstance(value, bool) or not math.isfinite(seconds) or seconds <= 0:
        raise InvalidRequest(provider, f"timeout must be a positive number of seconds, got {value!r}")
    return seconds


def resolve_model(config: Config, provider_name: str, model: str | None = None) -> str:
    """Explicit model, else NAME_MODEL, else DEFAULT_MODEL."""
    spec = get_provider(provider_name)
    resolved = (model or "").strip() or config.get(spec.name, "model") or config.default_model
    if not resolved:
        raise MissingConfiguration(
            spec.name, "model",
            f"pass --model or set {env_var_name(spec.name, 'model')} or DEFAULT_MODEL",
        )
    return resolved


class Dispatcher:
    def __init__(
        self,
        config: Config,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self._config = config
        self._session = session or requests.Session()
        timeout = timeout if timeout is not None else config.request_timeout
        self._timeout = parse_timeout(timeout) if timeout is not None else None

    def dispatch(
        self,
        provider_name: str,
        model: str,
        prompt: str,
        max_tokens: int | None = None,
    ) -> str:
        """
        Send one prompt and return the provider's text, unmodified.

        Raises:
            InvalidProvider: provider_name is not in the registry.
            InvalidRequest: empty model/prompt, a non-positive max_tokens or timeout.
            MissingConfiguration: key, URL or token limit cannot be resolved.
            TransportError: the POST could not be completed.
            InvalidResponse: no non-empty text at the provider's extraction path.
        """
        return self.send(self.prepare(provider_name, model, prompt, max_tokens))

    def resolve(
        self,
        provider_name: str,
        model: str,
        prompt: str,
        max_tokens: int | None = None,
    ) -> RequestConfig:
        spec = get_provider(provider_name)

        if not model or not model.strip():
            raise InvalidRequest(spec.name, "model must not be empty")
        if not prompt or not prompt.strip():
            raise InvalidRequest(spec.name, "prompt must not be empty")
        if max_tokens is not None:
            max_tokens = parse_max_tokens(max_tokens, spec.name)

        return RequestConfig(
            provider=spec,
            model=model.strip(),
            prompt=prompt,
            max_tokens=self._effective_max_tokens(spec, max_tokens),
        )

    def prepare(
        self,
        provider_name: str,
        model: str,
        prompt: str,
        max_tokens: int | None = None,
    ) -> OutboundRequest:
        """Validate and build the request without sending it."""
        request = self.resolve(provider_name, model, prompt, max_tokens)
        spec = request.provider

        api_key = self._config.get(spec.name, "api_key")
        auth = spec.auth_for(api_key)
        if auth is not AuthScheme.NONE and not api_key:
            raise MissingConfiguration(
                spec.name, "api_key", f"set {env_var_name(spec.name, 'api_key')}",
            )

        template = self._config.get(spec.name, "api_url") or spec.endpoint_template
        if not template:
            raise MissingConfiguration(
                spec.name, "api_url", f"set {env_var_name(spec.name, 'api_url')}",
            )

        headers = {"Content-Type": "application/json", **spec.extra_headers}
        params = {}
        if auth is AuthScheme.QUERY_PARAM:
            params[API_KEY_PARAM] = api_key
        elif auth is AuthScheme.BEARER:
            headers["Authorization"] = f"Bearer {api_key}"

        return OutboundRequest(
            provider=spec.name,
            url=spec.endpoint(request.model, template),
            body=spec.build_body(request.model, request.prompt, request.max_tokens),
            headers=headers,
            params=params,
        )

    def send(self, request: OutboundRequest) -> str:
        """POST a prepared request and extract the text from the reply."""
        spec = get_provider(request.provider)
        log.debug(f"POST {request.url} ({spec.name}, {len(json.dumps(request.body))} bytes)")

        try:
            resp = self._session.post(
                request.url,
                params=request.params or None,
                headers=request.headers,
                json=request.body,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            log.warning(f"{spec.name} transport failure: {type(e).__name__}")
            raise TransportError(spec.name, request.url, type(e).__name__) from e

        return self._extract(spec, resp)

    def _effective_max_tokens(self, spec: ProviderSpec, override: int | None) -> int:
        if override is not None:
            return override

        var = env_var_name(spec.name, "max_tokens")
        default = self._config.get(spec.name, "max_tokens")
        if default is None:
            raise MissingConfiguration(spec.name, "max_tokens", f"pass --max-tokens or set {var}")
        try:
            return parse_max_tokens(default, spec.name)
        except InvalidRequest:
            raise MissingConfiguration(
                spec.name, "max_tokens", f"{var}={default!r} is not a positive integer",
            ) from None

    def _extract(self, spec: ProviderSpec, resp: requests.Response) -> str:
        raw = resp.text
        try:
            data = resp.json()
        except ValueError:
            log.warning(f"{spec.name} returned non-JSON body (HTTP {resp.status_code})")
            raise InvalidResponse(spec.name, raw, resp.status_code) from None

        text = spec.extract_text(data)
        if text is None:
            log.warning(f"{spec.name} response has no text at {spec.extract_path}")
            raise InvalidResponse(spec.name, raw, resp.status_code)
        return text
