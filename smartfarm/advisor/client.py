"""AdvisorClient — farming tips from a hosted text-generation model.

Builds a prompt from a ``FarmState`` snapshot and a player question,
sends it as a single-turn request to the Bedrock runtime, and returns
the first message of the reply.  The call never raises: transport
errors and unexpected responses all degrade to ``FALLBACK_ADVICE``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from smartfarm.simulation.config import AdvisorConfig
from smartfarm.simulation.errors import AdvisoryUnavailable

if TYPE_CHECKING:
    from smartfarm.simulation.state import FarmState

logger = logging.getLogger(__name__)

FALLBACK_ADVICE = (
    "I'm having trouble connecting right now. "
    "Ask me about the current weather or crop conditions instead."
)


def build_prompt(state: FarmState, question: str) -> str:
    """Compose the advisor prompt for ``question`` under ``state``."""
    return (
        "You are a friendly AI farm advisor. "
        "Here are the current farming conditions:\n"
        f"  - Weather: {state.weather.value}\n"
        f"  - Temperature: {state.temperature}°F\n"
        f"  - Moisture: {state.moisture}%\n"
        f"  - Available Money: ${state.money}\n"
        f"  - Current Day: {state.day}\n"
        "\n"
        f'The player asks: "{question}"\n'
        "\n"
        "Provide brief, practical farming advice based on these conditions."
    )


def extract_advice(body: Any) -> str:
    """Pull the advice text out of a decoded response body.

    The reply must be a mapping with a non-empty ``messages`` list whose
    first entry has string ``content``.

    Raises:
        AdvisoryUnavailable: If the body has any other shape.
    """
    if not isinstance(body, dict):
        raise AdvisoryUnavailable("response body is not an object")
    messages = body.get("messages")
    if not isinstance(messages, list) or not messages:
        raise AdvisoryUnavailable("response has no messages")
    first = messages[0]
    content = first.get("content") if isinstance(first, dict) else None
    if not isinstance(content, str):
        raise AdvisoryUnavailable("first message has no text content")
    return content


class AdvisorClient:
    """Stateless request/response wrapper around the advice service.

    Attributes:
        config: Model, sampling and region settings.
    """

    def __init__(self, config: AdvisorConfig | None = None, client: Any = None) -> None:
        """Initialise the advisor.

        Args:
            config: Advisor settings; defaults to ``AdvisorConfig()``.
            client: Pre-built ``bedrock-runtime`` client.  Created lazily
                from ``config`` on first use when omitted.
        """
        self.config = config or AdvisorConfig()
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client(
                "bedrock-runtime",
                region_name=self.config.region,
                aws_access_key_id=self.config.access_key_id,
                aws_secret_access_key=self.config.secret_access_key,
            )
        return self._client

    def request_body(self, prompt: str) -> str:
        """Serialise the single-turn request document."""
        return json.dumps(
            {
                "anthropic_version": self.config.anthropic_version,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": self.config.max_tokens,
                "temperature": self.config.temperature,
            },
        )

    def request_advice(self, state: FarmState, question: str) -> str:
        """Ask the service for advice about ``question``.

        Args:
            state: Snapshot the advice should be based on.
            question: The player's literal question.

        Returns:
            Advice text, or ``FALLBACK_ADVICE`` on any failure.  Never
            raises.
        """
        prompt = build_prompt(state, question)
        logger.debug(
            "Requesting advice from %s in %s",
            self.config.model_id,
            self.config.region,
        )
        try:
            response = self.client.invoke_model(
                modelId=self.config.model_id,
                contentType="application/json",
                accept="application/json",
                body=self.request_body(prompt),
            )
            body = json.loads(response["body"].read())
            return extract_advice(body)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("Advice service unreachable: %s", exc, exc_info=True)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Advice response could not be decoded: %s", exc)
        except AdvisoryUnavailable as exc:
            logger.warning("Unexpected advice response: %s", exc)
        except Exception as exc:
            logger.warning("Advice request failed: %s", exc, exc_info=True)
        return FALLBACK_ADVICE
