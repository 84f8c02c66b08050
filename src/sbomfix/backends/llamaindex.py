"""Semantic-analysis backend: a LlamaIndex service behind a JSON endpoint."""

from __future__ import annotations

import logging

import httpx

from sbomfix.errors import BackendError

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_QUERY = (
    "Analyze these vulnerabilities and produce a shell script that upgrades "
    "each vulnerable package to its fixed version."
)


class LlamaIndexClient:
    """POSTs scan and SBOM text, expects ``{"response": "..."}`` back."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 120.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._timeout = timeout
        self._http = http_client or httpx.Client()

    def close(self) -> None:
        self._http.close()

    def analyze(self, scan_text: str, sbom_text: str, query: str | None = None) -> str:
        payload = {
            "query": query or DEFAULT_ANALYSIS_QUERY,
            "scan_data": scan_text,
            "sbom_data": sbom_text,
        }
        logger.info("Sending analysis request to %s", self.endpoint)
        try:
            resp = self._http.post(self.endpoint, json=payload, timeout=self._timeout)
        except httpx.HTTPError as exc:
            raise BackendError(f"LlamaIndex request failed: {exc}") from exc

        if resp.status_code != 200:
            raise BackendError(f"LlamaIndex API returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise BackendError(f"Malformed LlamaIndex response: {exc}") from exc

        answer = data.get("response") if isinstance(data, dict) else None
        if not isinstance(answer, str):
            raise BackendError("Malformed LlamaIndex response: missing 'response'")
        return answer
