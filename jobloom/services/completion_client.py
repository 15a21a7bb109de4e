import logging
from typing import Any, Dict, Optional
import httpx
from openai import AsyncOpenAI, OpenAIError

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Raised when the completion service call fails for any reason"""
    pass


class CompletionClient:
    """
    Thin proxy to the text-completions endpoint.

    Sends a single request per call with no retries and hands back the
    upstream JSON body untouched.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        """
        Request a completion for prompt.

        Args:
            prompt: Full prompt text
            max_tokens: Cap on generated tokens

        Returns:
            The raw response body from the completion service

        Raises:
            UpstreamError: On network errors, non-2xx responses or an undecodable body
        """
        logger.debug(f"Requesting completion from {self.model} (max_tokens={max_tokens})")
        try:
            response = await self._client.completions.with_raw_response.create(
                model=self.model,
                prompt=prompt,
                max_tokens=max_tokens,
            )
            return response.http_response.json()
        except OpenAIError as e:
            raise UpstreamError(f"Completion request failed: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Completion response was not JSON: {e}") from e

    async def close(self) -> None:
        await self._client.close()
