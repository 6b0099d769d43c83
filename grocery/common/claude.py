"""
Shared Claude API plumbing for the AI-backed capabilities

Wraps anthropic.AsyncAnthropic so callers see only the pipeline's capability
errors (ServiceUnavailable / InvalidResponse / Timeout) and get the JSON
payload of the reply already decoded.
"""
import json
from typing import Any, Dict, Optional

import anthropic
import httpx
import structlog

from grocery.common.errors import InvalidResponse, ServiceUnavailable, Timeout

logger = structlog.get_logger()


def build_client(api_key: Optional[str], timeout_seconds: float) -> Optional[anthropic.AsyncAnthropic]:
    """
    Build an Anthropic client, or None when no key is configured.

    Retries are disabled: a failed call is reported once and the caller
    keeps its deterministic result.
    """
    if not api_key:
        logger.warning("anthropic_api_key_missing",
                      message="ANTHROPIC_API_KEY not set, AI capabilities disabled")
        return None

    return anthropic.AsyncAnthropic(
        api_key=api_key,
        timeout=httpx.Timeout(timeout_seconds, connect=5.0),
        max_retries=0,
    )


def strip_json_fences(response_text: str) -> str:
    """Extract JSON if Claude wrapped it in markdown"""
    if "```json" in response_text:
        return response_text.split("```json")[1].split("```")[0].strip()
    if "```" in response_text:
        return response_text.split("```")[1].split("```")[0].strip()
    return response_text.strip()


async def request_json(
    client: Optional[anthropic.AsyncAnthropic],
    model: str,
    prompt: str,
    max_tokens: int = 1024,
) -> Dict[str, Any]:
    """
    Send a single-turn prompt and decode the JSON object in the reply.

    Args:
        client: Anthropic client (None means not configured)
        model: Model name
        prompt: User prompt
        max_tokens: Response token cap

    Returns:
        Decoded JSON object

    Raises:
        ServiceUnavailable: No client, connection failure, or API error status
        Timeout: Request timed out
        InvalidResponse: Reply is empty or not a JSON object
    """
    if client is None:
        raise ServiceUnavailable("Anthropic client not configured")

    try:
        response = await client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=0.0,
            messages=[
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        )
    except anthropic.APITimeoutError as e:
        raise Timeout(str(e)) from e
    except anthropic.APIConnectionError as e:
        raise ServiceUnavailable(str(e)) from e
    except anthropic.APIStatusError as e:
        raise ServiceUnavailable(f"Anthropic API error ({e.status_code})") from e

    try:
        response_text = response.content[0].text
    except (AttributeError, IndexError, TypeError) as e:
        raise InvalidResponse("Empty response from Anthropic API") from e

    try:
        data = json.loads(strip_json_fences(response_text))
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("ai_response_parse_failed", response=response_text, error=str(e))
        raise InvalidResponse(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidResponse("Response JSON is not an object")

    return data
