"""
ATS keyword scoring.

Scores how well a resume covers the keywords of a job description. The
pipeline is split into small pure functions so each stage can be tested on
its own:

    tokenize -> extract_keywords -> match_keywords -> compute_score

Matching policy: exact tokens after lower-casing, extended by simple
singular/plural variants (``-s``, ``-es``, ``-ies``/``-y``/``-ie``). No stemming
library and no synonyms; changing this policy changes scores, so the golden
tests in tests/test_ats_engine.py must be updated with it.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set, Tuple

from resumatrix.core.errors import InputError, InternalError

logger = logging.getLogger(__name__)

# Letter/digit runs, optionally followed by "+" or "#" (c++, c#, f#)
TOKEN_PATTERN = re.compile(r"[^\W_]+[+#]*")

MIN_TOKEN_LENGTH = 2

# Common English function words plus job-posting boilerplate that says
# nothing about the skills being asked for.
STOP_WORDS = frozenset({
    # articles, conjunctions, prepositions
    "a", "an", "the", "and", "or", "but", "nor", "so", "yet", "if", "then",
    "than", "as", "at", "by", "for", "from", "in", "into", "of", "on", "onto",
    "to", "with", "within", "without", "about", "above", "across", "after",
    "against", "along", "among", "around", "before", "behind", "below",
    "between", "beyond", "during", "except", "over", "per", "since",
    "through", "throughout", "toward", "towards", "under", "until", "upon",
    "via", "while", "whether", "both", "either", "neither", "etc",
    # pronouns and determiners
    "i", "me", "my", "mine", "we", "us", "our", "ours", "you", "your",
    "yours", "he", "him", "his", "she", "her", "hers", "it", "its", "they",
    "them", "their", "theirs", "this", "that", "these", "those", "who",
    "whom", "whose", "which", "what", "where", "when", "why", "how", "all",
    "any", "each", "every", "some", "such", "no", "not", "only", "own",
    "same", "other", "others", "another", "more", "most", "many", "much",
    "few", "several", "very", "also", "too", "just", "well", "plus",
    # auxiliaries and modals
    "am", "is", "are", "was", "were", "be", "been", "being", "have", "has",
    "had", "having", "do", "does", "did", "doing", "will", "would", "shall",
    "should", "can", "could", "may", "might", "must",
    # job-posting boilerplate
    "looking", "seeking", "seek", "hiring", "join", "joining", "familiar",
    "familiarity", "developer", "developers", "engineer", "engineers",
    "candidate", "candidates", "role", "position", "opportunity", "team",
    "teams", "company", "work", "working", "experience", "experienced",
    "years", "year", "ability", "able", "strong", "good", "great",
    "excellent", "knowledge", "understanding", "skills", "skill",
    "required", "requirements", "require", "requires", "preferred",
    "nice", "bonus", "responsibilities", "responsible", "including",
    "include", "includes", "using", "use", "ideal", "ideally", "someone",
    "proficient", "proficiency", "new", "like", "want", "need", "needs",
    "help", "build", "building",
})


@dataclass(frozen=True)
class ATSScoreResult:
    """Outcome of one scoring run."""
    score: int
    matched_keywords: Tuple[str, ...]
    missing_keywords: Tuple[str, ...]
    total_keywords: int


def tokenize(text: str) -> List[str]:
    """
    Lower-case ``text`` and split it into word tokens.

    Punctuation separates tokens; tokens shorter than two characters and
    pure numbers are dropped.
    """
    tokens = []
    for token in TOKEN_PATTERN.findall(text.lower()):
        if len(token) < MIN_TOKEN_LENGTH or token.isdigit():
            continue
        tokens.append(token)
    return tokens


def keyword_variants(token: str) -> Set[str]:
    """
    Return ``token`` together with its simple singular/plural forms.

    A token ending in ``s`` is treated as a possible plural and never gets
    another ``s`` appended (``cs`` and ``css`` stay distinct), except for
    ``-ss`` words, which only take ``-es``. Tokens of three characters or
    fewer are never singularized (``aws``, ``sas``).
    """
    variants = {token}
    if not token or not token[-1].isalpha():
        return variants

    if token.endswith("ies") and len(token) > 4:
        variants.add(token[:-3] + "y")
        variants.add(token[:-1])
    elif token.endswith("es") and len(token) > 3:
        variants.add(token[:-2])
        variants.add(token[:-1])
    elif token.endswith("s") and not token.endswith("ss") and len(token) > 3:
        variants.add(token[:-1])

    if token.endswith("ss"):
        variants.add(token + "es")
    elif not token.endswith("s"):
        if token.endswith("y") and len(token) > 2 and token[-2] not in "aeiou":
            variants.add(token[:-1] + "ies")
        variants.add(token + "s")
        variants.add(token + "es")
    return variants


def extract_keywords(job_description: str) -> List[str]:
    """
    Candidate keywords of a job description, in first-seen order.

    Stop words are dropped and a token whose singular/plural form was already
    taken is treated as a duplicate.
    """
    keywords = []
    seen: Set[str] = set()
    for token in tokenize(job_description):
        if token in STOP_WORDS:
            continue
        variants = keyword_variants(token)
        if variants & seen:
            continue
        seen.update(variants)
        keywords.append(token)
    return keywords


def match_keywords(keywords: Sequence[str], resume_text: str) -> List[str]:
    """Keywords (order kept) that appear in the resume, allowing plural variants."""
    resume_tokens = set(tokenize(resume_text))
    return [kw for kw in keywords if keyword_variants(kw) & resume_tokens]


def compute_score(matched: int, total: int) -> int:
    """Percentage of matched keywords, rounded half-up and clamped to 0..100."""
    if total <= 0:
        return 0
    # Integer arithmetic keeps .5 cases exact
    score = (200 * matched + total) // (2 * total)
    return max(0, min(100, score))


def _missing(keywords: Iterable[str], matched: Sequence[str]) -> Tuple[str, ...]:
    matched_set = set(matched)
    return tuple(kw for kw in keywords if kw not in matched_set)


def calculate_ats_score(resume_text: str, job_description: str) -> ATSScoreResult:
    """
    Score a resume against a job description.

    Args:
        resume_text: Plain resume text
        job_description: Job description text

    Returns:
        ATSScoreResult with a 0-100 score and the matched keywords in the
        order they appear in the job description. A job description without
        candidate keywords scores 0.

    Raises:
        InputError: either argument is not a string
        InternalError: the computation failed unexpectedly
    """
    if not isinstance(resume_text, str):
        raise InputError("resumeText must be a string")
    if not isinstance(job_description, str):
        raise InputError("jobDescription must be a string")

    try:
        keywords = extract_keywords(job_description)
        matched = match_keywords(keywords, resume_text)
        score = compute_score(len(matched), len(keywords))
    except Exception as e:
        logger.error(f"ATS scoring failed: {type(e).__name__}: {e}", exc_info=True)
        raise InternalError("Failed to calculate ATS score") from e

    logger.debug(f"ATS score {score} ({len(matched)}/{len(keywords)} keywords matched)")

    return ATSScoreResult(
        score=score,
        matched_keywords=tuple(matched),
        missing_keywords=_missing(keywords, matched),
        total_keywords=len(keywords),
    )
