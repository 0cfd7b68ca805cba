"""
OpenAI provider implementation.
"""
import logging
from typing import Optional, Dict
from openai import OpenAI, APIError

from resumatrix.llm.provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI provider using official OpenAI SDK."""

    name = "openai"

    def __init__(self, api_key: str, client: Optional[OpenAI] = None):
        """Initialize OpenAI client."""
        if not api_key:
            raise ValueError("OPENAI_API_KEY not configured")
        self.api_key = api_key
        self.client = client or OpenAI(api_key=self.api_key)
        logger.info("OpenAI provider initialized")

    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a chat completion."""
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or 8000,
                **kwargs
            )

            content = response.choices[0].message.content or ""
            usage = response.usage
            return LLMResponse(
                content=content,
                tokens_in=usage.prompt_tokens if usage else 0,
                tokens_out=usage.completion_tokens if usage else 0,
                model=model,
                metadata={
                    "finish_reason": response.choices[0].finish_reason,
                }
            )
        except APIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"OpenAI error: {e}", exc_info=True)
            raise
