"""Reassemble a newline-delimited JSON chat stream into one string."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)

NO_SCRIPT_PLACEHOLDER = (
    "No remediation script generated. Please verify the prompt or model."
)


def aggregate_stream(lines: Iterable[str]) -> str:
    """Concatenate ``message.content`` across every parseable line.

    Lines that are not JSON, or lack the field, are skipped. An empty result
    is replaced by :data:`NO_SCRIPT_PLACEHOLDER`.
    """
    parts: list[str] = []
    for line in lines:
        if not line.strip():
            continue
        try:
            event = json.loads(line)
        except json.JSONDecodeError as exc:
            logger.debug("Skipping unparseable stream line %r: %s", line, exc)
            continue

        content = _message_content(event)
        if content is None:
            logger.debug("Stream line without message.content: %r", line)
            continue
        parts.append(content)

    text = "".join(parts)
    if not text:
        logger.info("Stream produced no content, using placeholder")
        return NO_SCRIPT_PLACEHOLDER
    return text


def _message_content(event: object) -> str | None:
    if not isinstance(event, dict):
        return None
    message = event.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
