"""Generative-model backend: an Ollama server reached over HTTP."""

from __future__ import annotations

import logging

import httpx

from sbomfix.backends.stream import aggregate_stream
from sbomfix.errors import BackendError

logger = logging.getLogger(__name__)


class OllamaClient:
    """Chat completion against ``<host>/api/chat``.

    With ``stream=True`` the newline-delimited event stream is consumed and
    reassembled by :func:`aggregate_stream`; otherwise one blocking call is
    made and ``message.content`` is read from the response body.
    """

    def __init__(
        self,
        host: str,
        model: str = "mistral",
        timeout: float = 120.0,
        health_timeout: float = 10.0,
        stream: bool = False,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.host = host.rstrip("/")
        self.model = model
        self._timeout = timeout
        self._health_timeout = health_timeout
        self._stream = stream
        self._http = http_client or httpx.Client()

    def close(self) -> None:
        self._http.close()

    def health_check(self) -> None:
        url = f"{self.host}/api/tags"
        try:
            resp = self._http.get(url, timeout=self._health_timeout)
        except httpx.HTTPError as exc:
            raise BackendError(f"Ollama is unreachable at {self.host}: {exc}") from exc
        if resp.status_code != 200:
            raise BackendError(
                f"Ollama health check returned HTTP {resp.status_code}"
            )

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": self._stream,
        }
        url = f"{self.host}/api/chat"
        logger.info("Using Ollama model: %s", self.model)

        try:
            if self._stream:
                return self._generate_streamed(url, payload)
            resp = self._http.post(url, json=payload, timeout=self._timeout)
        except httpx.HTTPError as exc:
            raise BackendError(f"Ollama request failed: {exc}") from exc

        if resp.status_code != 200:
            raise BackendError(f"Ollama returned HTTP {resp.status_code}")
        try:
            data = resp.json()
            content = data["message"]["content"]
        except (ValueError, KeyError, TypeError) as exc:
            raise BackendError(f"Malformed Ollama response: {exc}") from exc
        if not isinstance(content, str):
            raise BackendError("Malformed Ollama response: content is not a string")
        return content

    def _generate_streamed(self, url: str, payload: dict) -> str:
        with self._http.stream("POST", url, json=payload, timeout=self._timeout) as resp:
            if resp.status_code != 200:
                raise BackendError(f"Ollama returned HTTP {resp.status_code}")
            return aggregate_stream(resp.iter_lines())
