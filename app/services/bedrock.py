"""
AWS Bedrock service – thin wrapper around boto3.
Keeps all Bedrock interaction in one place so the text generator can be
swapped without touching the writing flow or routers.
"""

import json
import logging
import time
from typing import Any

import boto3
from botocore.exceptions import ClientError

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

# ── Singleton client ────────────────────────────────────────────────────────

_bedrock_client = None


def _get_client(settings: Settings | None = None):
    """Return a reusable bedrock-runtime client (created once)."""
    global _bedrock_client
    if _bedrock_client is None:
        settings = settings or get_settings()
        _bedrock_client = boto3.client(
            service_name="bedrock-runtime",
            region_name=settings.aws_region,
        )
    return _bedrock_client


# ── Public helpers ──────────────────────────────────────────────────────────


def invoke_claude(
    messages: list[dict[str, Any]],
    *,
    system: str | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Send a messages-API call to Claude via Bedrock and return the parsed
    response body.

    Parameters
    ----------
    messages    : list of {"role": …, "content": …}
    system      : optional system prompt
    max_tokens / temperature : per-call overrides (fall back to settings)
    """
    settings = settings or get_settings()
    client = _get_client(settings)

    body: dict[str, Any] = {
        "anthropic_version": "bedrock-2023-05-31",
        "max_tokens": max_tokens or settings.bedrock_max_tokens,
        "temperature": temperature if temperature is not None else settings.bedrock_temperature,
        "messages": messages,
    }
    if system:
        body["system"] = system

    start = time.time()

    try:
        response = client.invoke_model(
            body=json.dumps(body),
            modelId=settings.bedrock_model_id,
            accept="application/json",
            contentType="application/json",
        )
    except ClientError as exc:
        logger.error("Bedrock invocation failed: %s", exc)
        raise

    response_body = json.loads(response["body"].read())
    logger.info(
        "Invoked Bedrock  model=%s  max_tokens=%s  time=%.3fs",
        settings.bedrock_model_id,
        body["max_tokens"],
        time.time() - start,
    )
    return response_body


# ── Response parsing ────────────────────────────────────────────────────────


def extract_text(response_body: dict[str, Any]) -> str:
    """Pull the assistant's text out of a Bedrock Messages-API response."""
    content_blocks = response_body.get("content", [])
    return "".join(
        block["text"] for block in content_blocks if block.get("type") == "text"
    )


def quick_ask(prompt: str, *, system: str | None = None) -> str:
    """Convenience: single user prompt → assistant text."""
    resp = invoke_claude(
        messages=[{"role": "user", "content": prompt}],
        system=system,
    )
    return extract_text(resp)
