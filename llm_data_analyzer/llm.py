"""Client for sending analysis prompts to an OpenAI-compatible endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from llm_data_analyzer.analyzer.models import AnalysisError

if TYPE_CHECKING:
    from pydantic_ai import Agent

    from llm_data_analyzer.config import EndpointConfig

LOGGER = logging.getLogger(__name__)


class LLMClient:
    """Send one prompt per request and return the model's text reply.

    Every failure (network, non-success status, malformed or empty response)
    surfaces as a single ``AnalysisError``; callers never see the distinction.
    """

    def __init__(
        self,
        endpoint_url: str,
        model: str,
        *,
        api_key: str | None = None,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.endpoint_url = endpoint_url.rstrip("/")
        self.model = model
        self.api_key = api_key or "not-needed"
        self.timeout = timeout
        self.logger = logger or LOGGER
        self._agent: Agent[None, str] | None = None

    @classmethod
    def from_endpoint(
        cls,
        endpoint: EndpointConfig,
        *,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> LLMClient:
        """Create a client for a configured endpoint, resolving its API key."""
        return cls(
            endpoint.endpoint_url,
            endpoint.model,
            api_key=endpoint.resolve_api_key(),
            timeout=timeout,
            logger=logger,
        )

    def _get_agent(self) -> Agent[None, str]:
        if self._agent is None:
            from pydantic_ai import Agent  # noqa: PLC0415
            from pydantic_ai.models.openai import OpenAIChatModel  # noqa: PLC0415
            from pydantic_ai.providers.openai import OpenAIProvider  # noqa: PLC0415
            from pydantic_ai.settings import ModelSettings  # noqa: PLC0415

            provider = OpenAIProvider(api_key=self.api_key, base_url=self.endpoint_url)
            settings = ModelSettings(timeout=self.timeout) if self.timeout else None
            model = OpenAIChatModel(
                model_name=self.model,
                provider=provider,
                settings=settings,
            )
            self._agent = Agent(model=model, output_type=str)
        return self._agent

    async def analyze(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message and return the reply text.

        Raises:
            AnalysisError: If the request fails for any reason.

        """
        from pydantic_ai.exceptions import (  # noqa: PLC0415
            AgentRunError,
            UnexpectedModelBehavior,
        )

        agent = self._get_agent()
        try:
            result = await agent.run(prompt)
        except (httpx.HTTPError, AgentRunError, UnexpectedModelBehavior) as e:
            self.logger.warning("Request to %s failed", self.endpoint_url, exc_info=True)
            msg = f"LLM request failed: {e}"
            raise AnalysisError(msg) from e
        except Exception as e:
            self.logger.exception("Unexpected error while calling %s", self.endpoint_url)
            msg = f"LLM request failed: {e}"
            raise AnalysisError(msg) from e
        return result.output
