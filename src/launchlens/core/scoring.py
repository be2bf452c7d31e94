"""Scoring and aggregation over provider sentiment results."""

import logging
from typing import List, Sequence

from .constants import PromptConstants
from .models import Review, SentimentResult, SentimentSummary, SentimentReconciliation

logger = logging.getLogger(__name__)


def summarize_sentiments(results: Sequence[SentimentResult], reviews: Sequence[Review]) -> SentimentSummary:
    """Count sentiment buckets and average the raw ratings.

    Counts come only from ``results`` and the average only from ``reviews``;
    the two may differ in length when the provider under- or over-reports.
    Any label other than exactly "positive" or "negative" is neutral.
    """
    positive = negative = neutral = 0
    for r in results:
        if r.sentiment == PromptConstants.POSITIVE:
            positive += 1
        elif r.sentiment == PromptConstants.NEGATIVE:
            negative += 1
        else:
            neutral += 1

    average_rating = sum(r.rating for r in reviews) / len(reviews) if reviews else 0.0
    return SentimentSummary(
        positive=positive,
        negative=negative,
        neutral=neutral,
        average_rating=average_rating,
    )


def _positive_rate(summary: SentimentSummary) -> float:
    return summary.positive / summary.total * 100


def compute_sentiment_shift(pre: SentimentSummary, post: SentimentSummary) -> float:
    """Percentage-point change in positive rate, each side over its own total.

    Returns 0.0 when either side has no classified results.
    """
    if pre.total == 0 or post.total == 0:
        return 0.0
    return _positive_rate(post) - _positive_rate(pre)


def reconcile_sentiments(results: Sequence[SentimentResult], reviews: Sequence[Review]) -> SentimentReconciliation:
    """Match provider results to input reviews by id (never by position)."""
    review_ids = {r.id for r in reviews}
    result_ids = {r.review_id for r in results}

    matched = sum(1 for r in results if r.review_id in review_ids)
    unmatched: List[str] = sorted(result_ids - review_ids)
    missing: List[str] = [r.id for r in reviews if r.id not in result_ids]

    return SentimentReconciliation(
        result_count=len(results),
        review_count=len(reviews),
        matched=matched,
        unmatched_result_ids=unmatched,
        missing_review_ids=missing,
    )
