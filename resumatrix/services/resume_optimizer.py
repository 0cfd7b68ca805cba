"""
ATS resume optimization through a language model.

The model receives a fixed set of rules plus the job description and the
user's LaTeX, and must answer with LaTeX only.
"""
import logging
import re

from resumatrix.core.errors import OptimizationError
from resumatrix.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

OPTIMIZE_PROMPT = """You are an expert in ATS resume optimization.

Follow these STRICT rules to update the user's LaTeX resume using the job description:

- Return ONLY the revised LaTeX code. Output nothing else.
- DO NOT exceed one page. If the resume is too long, first trim or shorten bullet points in Achievements, Certifications, and Projects, using fewer words or synonyms (ATS OPTIMIZED) until it fits. Never remove or alter project or section names.
- DO NOT add new sections, personal information, images, icons, graphics, tables, fonts, or colors. Keep everything black and white.
- ONLY modify existing content to add or emphasize relevant, *truthful* keywords and skills from the job description. Do NOT invent or exaggerate experience.
- NEVER change or rename any project titles, work experiences, or education items. Only minor section titles (e.g. "Achievements" to "Awards") may be renamed for ATS if relevant.
- KEEP the original structure, order, and formatting. Do NOT alter font size, font family, or margins.
- DO NOT add bold or italic formatting to individual skills in Technical Skills. Only section headings like Technologies or Languages may use \\textbf{{}}.
- For bullet points, rewrite only to better align with the job description, incorporate relevant keywords honestly, and increase ATS score, without adding unsupported content.
- Resume must compile and remain strictly within a single page at all times.
- ZERO commentary, explanation, or extra text. ONLY the final, optimized LaTeX code.

Input:

Job Description:
{job_description}

User Resume LaTeX:
{resume_latex}
"""

# Language tag left behind after the opening fence is removed
_LANGUAGE_TAG = re.compile(r"^\s*(?:latex|tex)\b[ \t]*\n?", re.IGNORECASE)


class ResumeOptimizer:
    """Rewrites resume LaTeX for a job description with an LLM provider."""

    def __init__(self, provider: LLMProvider, model: str, temperature: float = 0.7):
        self.provider = provider
        self.model = model
        self.temperature = temperature

    @staticmethod
    def build_prompt(job_description: str, resume_latex: str) -> str:
        return OPTIMIZE_PROMPT.format(
            job_description=job_description,
            resume_latex=resume_latex,
        )

    @staticmethod
    def clean_output(text: str) -> str:
        """Strip Markdown code fences and a leading ``latex`` tag."""
        cleaned = text.replace("```", "")
        cleaned = _LANGUAGE_TAG.sub("", cleaned, count=1)
        return cleaned.strip()

    def optimize(self, job_description: str, resume_latex: str) -> str:
        """
        Return the optimized LaTeX.

        Raises:
            OptimizationError: the provider failed or answered with nothing
        """
        prompt = self.build_prompt(job_description, resume_latex)
        try:
            response = self.provider.chat(
                messages=[{"role": "user", "content": prompt}],
                model=self.model,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error(f"AI optimization error: {type(e).__name__}: {e}", exc_info=True)
            raise OptimizationError() from e

        optimized = self.clean_output(response.content or "")
        if not optimized:
            logger.error(f"Model {self.model} returned an empty optimization result")
            raise OptimizationError()

        logger.info(
            f"Resume optimized with {self.model} "
            f"(tokens in={response.tokens_in}, out={response.tokens_out})"
        )
        return optimized
