"""Pre/post launch analysis pipeline."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import List, Sequence, Tuple

from ..core.constants import CollectionLabels, StageNames
from ..core.exceptions import ProviderError
from ..core.models import (
    Review,
    ReviewCollection,
    SentimentResult,
    ComparisonResult,
    AnalysisResult,
)
from ..core.scoring import summarize_sentiments, compute_sentiment_shift, reconcile_sentiments

logger = logging.getLogger(__name__)


def _rfc3339_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class AnalysisService:
    """Runs one analysis: four provider calls plus local aggregation.

    Any provider failure aborts the run. The error keeps its type and gets the
    failing stage attached; nothing computed before the failure is returned.
    """

    def __init__(self, llm, parallel_sentiment: bool = False):
        self.llm = llm
        self.parallel_sentiment = parallel_sentiment

    def _stage(self, stage: str, fn, *args):
        try:
            return fn(*args)
        except ProviderError as e:
            logger.error(f"{stage}: {e.message}")
            raise e.with_stage(stage) from e

    def _score_sequential(self, pre: Sequence[Review], post: Sequence[Review]) -> Tuple[List[SentimentResult], List[SentimentResult]]:
        pre_results = self._stage(StageNames.PRE_SENTIMENT, self.llm.analyze_sentiments, pre)
        post_results = self._stage(StageNames.POST_SENTIMENT, self.llm.analyze_sentiments, post)
        return pre_results, post_results

    def _score_parallel(self, pre: Sequence[Review], post: Sequence[Review]) -> Tuple[List[SentimentResult], List[SentimentResult]]:
        with ThreadPoolExecutor(max_workers=2) as executor:
            pre_future = executor.submit(self._stage, StageNames.PRE_SENTIMENT, self.llm.analyze_sentiments, pre)
            post_future = executor.submit(self._stage, StageNames.POST_SENTIMENT, self.llm.analyze_sentiments, post)
            wait([pre_future, post_future])
        # pre-launch error wins when both sides fail
        return pre_future.result(), post_future.result()

    def analyze(self, pre_reviews: Sequence[Review], post_reviews: Sequence[Review]) -> AnalysisResult:
        pre_collection = ReviewCollection(reviews=tuple(pre_reviews), label=CollectionLabels.PRE_LAUNCH)
        post_collection = ReviewCollection(reviews=tuple(post_reviews), label=CollectionLabels.POST_LAUNCH)
        logger.info(f"Starting analysis: {pre_collection.count} pre-launch, {post_collection.count} post-launch reviews")

        if self.parallel_sentiment:
            pre_sentiments, post_sentiments = self._score_parallel(pre_collection.reviews, post_collection.reviews)
        else:
            pre_sentiments, post_sentiments = self._score_sequential(pre_collection.reviews, post_collection.reviews)

        for label, results, collection in (
            (CollectionLabels.PRE_LAUNCH, pre_sentiments, pre_collection),
            (CollectionLabels.POST_LAUNCH, post_sentiments, post_collection),
        ):
            rec = reconcile_sentiments(results, collection.reviews)
            if not rec.is_aligned:
                logger.warning(
                    f"{label}: {rec.result_count} sentiment results for {rec.review_count} reviews "
                    f"({rec.matched} matched, {len(rec.unmatched_result_ids)} unknown ids, "
                    f"{len(rec.missing_review_ids)} reviews unscored)"
                )

        pre_summary = summarize_sentiments(pre_sentiments, pre_collection.reviews)
        post_summary = summarize_sentiments(post_sentiments, post_collection.reviews)

        themes = self._stage(StageNames.THEMES, self.llm.extract_themes, pre_collection.reviews, post_collection.reviews)

        comparison = ComparisonResult(
            pre_launch_sentiment=pre_summary,
            post_launch_sentiment=post_summary,
            sentiment_shift=compute_sentiment_shift(pre_summary, post_summary),
            themes=tuple(themes),
        )
        logger.info(f"Sentiment shift: {comparison.sentiment_shift:+.2f} points across {len(themes)} themes")

        impact = self._stage(StageNames.IMPACT, self.llm.generate_impact_summary, pre_collection, post_collection, comparison)

        return AnalysisResult(
            pre_launch_reviews=pre_collection,
            post_launch_reviews=post_collection,
            comparison=comparison,
            impact=impact,
            analyzed_at=_rfc3339_now(),
        )
