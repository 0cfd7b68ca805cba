"""
Google Gemini provider implementation.
"""
import logging
from typing import Optional, Dict

import google.generativeai as genai

from resumatrix.llm.provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


def _split_messages(messages: list[Dict[str, str]]) -> tuple[Optional[str], str]:
    """Gemini takes system text separately; the rest becomes one prompt."""
    system_parts = [m["content"] for m in messages if m.get("role") == "system"]
    prompt_parts = [m["content"] for m in messages if m.get("role") != "system"]
    system_instruction = "\n\n".join(system_parts) or None
    return system_instruction, "\n\n".join(prompt_parts)


class GeminiProvider(LLMProvider):
    """Gemini provider using the google-generativeai SDK."""

    name = "gemini"

    def __init__(self, api_key: str):
        if not api_key:
            raise ValueError("GEMINI_API_KEY not configured")
        self.api_key = api_key
        genai.configure(api_key=self.api_key)
        logger.info("Gemini provider initialized")

    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a completion from the concatenated messages."""
        system_instruction, prompt = _split_messages(messages)
        try:
            generative_model = genai.GenerativeModel(model, system_instruction=system_instruction)
            config = genai.GenerationConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            )
            response = generative_model.generate_content(prompt, generation_config=config, **kwargs)

            usage = getattr(response, "usage_metadata", None)
            finish_reason = None
            if getattr(response, "candidates", None):
                finish_reason = str(response.candidates[0].finish_reason)

            return LLMResponse(
                content=response.text or "",
                tokens_in=getattr(usage, "prompt_token_count", 0) or 0,
                tokens_out=getattr(usage, "candidates_token_count", 0) or 0,
                model=model,
                metadata={"finish_reason": finish_reason},
            )
        except Exception as e:
            logger.error(f"Gemini error: {type(e).__name__}: {e}", exc_info=True)
            raise
