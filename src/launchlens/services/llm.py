"""LLM gateway: prompts in, validated analysis objects out."""

import json
import logging
import re
from textwrap import dedent
from typing import List, Any, Optional, Sequence

import openai
from pydantic import TypeAdapter, ValidationError

from ..core.config import settings, Settings
from ..core.constants import PromptConstants, ErrorConstants
from ..core.exceptions import (
    ConfigurationError,
    ProviderAPIError,
    ProviderEmptyResponseError,
    ProviderMalformedJSONError,
    ProviderTransportError,
)
from ..core.models import (
    Review,
    ReviewCollection,
    SentimentResult,
    ThemeResult,
    ComparisonResult,
    ImpactSummary,
)

logger = logging.getLogger(__name__)

SENTIMENT_PROMPT = dedent("""
Analyze the sentiment of these customer reviews. For each review, classify as "positive", "negative", or "neutral" with a confidence score (0-1).

Reviews:
{reviews}

Respond ONLY with a valid JSON array in this exact format (no markdown, no explanation):
[{{"review_id": "id", "sentiment": "positive/negative/neutral", "score": 0.95}}]
""").strip()

THEME_PROMPT = dedent("""
Analyze and compare themes between pre-launch and post-launch customer reviews.

PRE-LAUNCH REVIEWS:
{pre_reviews}

POST-LAUNCH REVIEWS:
{post_reviews}

Extract the top {theme_count} themes mentioned across both sets. For each theme, count occurrences in pre and post launch, calculate percentage change, and determine overall sentiment.

Respond ONLY with a valid JSON array in this exact format (no markdown, no explanation):
[{{"theme": "theme name", "pre_count": 5, "post_count": 8, "change_rate": 60.0, "sentiment": "positive/negative/neutral"}}]
""").strip()

IMPACT_PROMPT = dedent("""
You are analyzing the impact of a feature launch based on customer reviews.

PRE-LAUNCH DATA:
- Total reviews: {pre_count}
- Positive: {pre_positive}, Negative: {pre_negative}, Neutral: {pre_neutral}
- Average rating: {pre_average:.2f}

POST-LAUNCH DATA:
- Total reviews: {post_count}
- Positive: {post_positive}, Negative: {post_negative}, Neutral: {post_neutral}
- Average rating: {post_average:.2f}

SENTIMENT SHIFT: {shift:.2f}%

KEY THEMES IDENTIFIED:
{themes}

Based on this data, provide a comprehensive launch impact analysis.

Respond ONLY with a valid JSON object in this exact format (no markdown, no explanation):
{{
  "overall_success": true,
  "success_score": 75.5,
  "key_improvements": ["improvement 1", "improvement 2"],
  "critical_issues": ["issue 1", "issue 2"],
  "recommendations": ["recommendation 1", "recommendation 2"],
  "executive_summary": "A 2-3 sentence summary of the launch impact"
}}
""").strip()

_FENCE_OPEN = re.compile(r"^\s*```(?:json)?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"```\s*$")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")

_SENTIMENTS = TypeAdapter(List[SentimentResult])
_THEMES = TypeAdapter(List[ThemeResult])
_IMPACT = TypeAdapter(ImpactSummary)


def strip_code_fences(s: str) -> str:
    """Remove one leading ```/```json marker and one trailing ``` marker."""
    s = _FENCE_OPEN.sub("", s, count=1)
    s = _FENCE_CLOSE.sub("", s, count=1)
    return s.strip()


def _outer_block(s: str, opener: str, closer: str) -> Optional[str]:
    start, end = s.find(opener), s.rfind(closer)
    if start == -1 or end <= start:
        return None
    return s[start:end + 1]


def _loads_with_repair(text: str, opener: str, closer: str) -> Any:
    """Parse JSON, falling back to trailing-comma removal and block extraction."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        first_error = e

    candidates = [_TRAILING_COMMA.sub(r"\1", text)]
    block = _outer_block(text, opener, closer)
    if block is not None:
        candidates.append(block)
        candidates.append(_TRAILING_COMMA.sub(r"\1", block))

    for candidate in candidates:
        if candidate == text:
            continue
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        logger.debug("Recovered provider JSON after repair")
        return data
    raise first_error


def parse_provider_json(raw: str, adapter: TypeAdapter, what: str, expect_array: bool = True) -> Any:
    """Sanitize, parse and shape-check a provider reply.

    Raises :class:`ProviderMalformedJSONError` carrying ``raw`` when the text
    is not JSON or does not fit ``adapter``'s type.
    """
    opener, closer = ("[", "]") if expect_array else ("{", "}")
    cleaned = strip_code_fences(raw)
    try:
        data = _loads_with_repair(cleaned, opener, closer)
        return adapter.validate_python(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Unparseable {what}: {raw[:PromptConstants.MAX_RAW_TEXT_IN_LOG]!r}")
        raise ProviderMalformedJSONError(f"failed to parse {what}: {e}", raw_text=raw) from e


def _format_reviews_for_sentiment(reviews: Sequence[Review]) -> str:
    return "".join(f"ID: {r.id} | Rating: {r.rating} | Review: {r.review_text}\n" for r in reviews)


def _format_reviews_for_themes(reviews: Sequence[Review]) -> str:
    return "".join(f"- {r.review_text} (Rating: {r.rating})\n" for r in reviews)


def _format_themes_for_summary(themes: Sequence[ThemeResult]) -> str:
    return "".join(
        f"- {t.theme}: Pre={t.pre_count}, Post={t.post_count}, Change={t.change_rate:.1f}%, Sentiment={t.sentiment}\n"
        for t in themes
    )


def _error_message(body: Any) -> Optional[str]:
    """Pull the message out of a provider error object, if it has one."""
    if isinstance(body, dict):
        if isinstance(body.get("error"), dict):
            body = body["error"]
        message = body.get("message")
        return str(message) if message else None
    message = getattr(body, "message", None)
    return str(message) if message else None


class LLMServiceFactory:
    """Factory for creating the provider gateway."""

    @staticmethod
    def create(config: Settings = None) -> "ProviderGateway":
        """Create a gateway from settings; the API key is mandatory."""
        config = config or settings
        if not config.effective_api_key:
            raise ConfigurationError("GROQ_API_KEY environment variable is required")
        return ProviderGateway(
            api_key=config.effective_api_key,
            base_url=config.provider_base_url,
            model=config.provider_model,
            timeout=config.request_timeout,
        )


class ProviderGateway:
    """OpenAI-compatible chat-completions client for the three analysis calls."""

    def __init__(self, api_key: str = None, base_url: str = None, model: str = None,
                 timeout: float = None, client=None):
        self.model = model or settings.provider_model
        self.client = client or openai.OpenAI(
            api_key=api_key or settings.effective_api_key,
            base_url=base_url or settings.provider_base_url,
            timeout=timeout or settings.request_timeout,
            max_retries=ErrorConstants.MAX_RETRY_ATTEMPTS,
        )
        logger.info(f"Provider gateway initialized with model {self.model}")

    def chat(self, prompt: str) -> str:
        """Send one user message and return the raw text of the first choice."""
        logger.debug(f"Provider request: {len(prompt)} chars")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.APIStatusError as e:
            message = _error_message(e.body)
            logger.error(f"Provider returned HTTP {e.status_code}")
            if message:
                raise ProviderAPIError(f"provider API error: {message}", status_code=e.status_code) from e
            raise ProviderTransportError(f"provider returned HTTP {e.status_code}", status_code=e.status_code) from e
        except openai.OpenAIError as e:
            logger.error(f"Provider call failed: {e}")
            raise ProviderTransportError(f"failed to call provider: {e}") from e

        error = getattr(response, "error", None)
        if error:
            raise ProviderAPIError(f"provider API error: {_error_message(error) or error}")

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise ProviderEmptyResponseError("empty response from provider")

        content = choices[0].message.content or ""
        logger.debug(f"Provider response: {len(content)} chars")
        return content

    def analyze_sentiments(self, reviews: Sequence[Review]) -> List[SentimentResult]:
        """Classify every review in a single call; no call at all for an empty batch."""
        if not reviews:
            return []

        prompt = SENTIMENT_PROMPT.format(reviews=_format_reviews_for_sentiment(reviews))
        results = parse_provider_json(self.chat(prompt), _SENTIMENTS, "sentiment results")
        logger.info(f"Scored {len(results)} sentiments for {len(reviews)} reviews")
        return results

    def extract_themes(self, pre_reviews: Sequence[Review], post_reviews: Sequence[Review]) -> List[ThemeResult]:
        """Ask for the main themes across both batches with per-batch counts."""
        prompt = THEME_PROMPT.format(
            pre_reviews=_format_reviews_for_themes(pre_reviews),
            post_reviews=_format_reviews_for_themes(post_reviews),
            theme_count=PromptConstants.THEME_COUNT,
        )
        themes = parse_provider_json(self.chat(prompt), _THEMES, "theme results")
        if len(themes) != PromptConstants.THEME_COUNT:
            logger.debug(f"Provider returned {len(themes)} themes (asked for {PromptConstants.THEME_COUNT})")
        return themes

    def generate_impact_summary(self, pre: ReviewCollection, post: ReviewCollection,
                                comparison: ComparisonResult) -> ImpactSummary:
        pre_s, post_s = comparison.pre_launch_sentiment, comparison.post_launch_sentiment
        prompt = IMPACT_PROMPT.format(
            pre_count=pre.count,
            pre_positive=pre_s.positive,
            pre_negative=pre_s.negative,
            pre_neutral=pre_s.neutral,
            pre_average=pre_s.average_rating,
            post_count=post.count,
            post_positive=post_s.positive,
            post_negative=post_s.negative,
            post_neutral=post_s.neutral,
            post_average=post_s.average_rating,
            shift=comparison.sentiment_shift,
            themes=_format_themes_for_summary(comparison.themes),
        )
        return parse_provider_json(self.chat(prompt), _IMPACT, "impact summary", expect_array=False)
