"""Per-session holder for the pending pre/post upload pair."""

import logging
from dataclasses import dataclass, field
from typing import List

from ..core.config import settings
from ..core.constants import ErrorConstants
from ..core.exceptions import MalformedInputError, MissingUploadError
from ..core.models import Review, UploadReceipt, AnalysisResult
from ..core.parsing import ReviewParser, ReviewSource

logger = logging.getLogger(__name__)


def _read_limited(source: ReviewSource, limit: int):
    data = source.read(limit + 1) if hasattr(source, "read") else source
    if len(data) > limit:
        raise MalformedInputError(f"upload exceeds {limit} bytes")
    return data


@dataclass
class UploadSession:
    """Uploads waiting for analysis. One instance per user session, never shared."""
    pre_reviews: List[Review] = field(default_factory=list)
    post_reviews: List[Review] = field(default_factory=list)
    max_upload_bytes: int = field(default_factory=lambda: settings.max_upload_bytes)

    def _parse(self, parser: ReviewParser, source: ReviewSource, side: str) -> List[Review]:
        try:
            return parser.parse(_read_limited(source, self.max_upload_bytes))
        except MalformedInputError as e:
            raise MalformedInputError(f"Failed to parse {side} CSV: {e.message}", line=e.line) from e

    def upload(self, pre_source: ReviewSource, post_source: ReviewSource, parser: ReviewParser = None) -> UploadReceipt:
        """Parse both files; the session is only updated when both succeed."""
        parser = parser or ReviewParser()
        pre = self._parse(parser, pre_source, "pre-launch")
        post = self._parse(parser, post_source, "post-launch")
        self.pre_reviews, self.post_reviews = pre, post
        logger.info(f"Upload accepted: {len(pre)} pre-launch, {len(post)} post-launch reviews")
        return UploadReceipt(
            success=True,
            pre_launch_count=len(pre),
            post_launch_count=len(post),
            message=ErrorConstants.UPLOAD_SUCCESS_MESSAGE,
        )

    @property
    def ready(self) -> bool:
        return bool(self.pre_reviews) and bool(self.post_reviews)

    def analyze(self, service) -> AnalysisResult:
        if not self.ready:
            raise MissingUploadError(ErrorConstants.MISSING_UPLOAD_MESSAGE)
        return service.analyze(self.pre_reviews, self.post_reviews)

    def clear(self) -> None:
        self.pre_reviews = []
        self.post_reviews = []
