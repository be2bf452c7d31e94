"""Data models for LaunchLens."""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Tuple

from pydantic import ConfigDict


@dataclass(frozen=True)
class Review:
    """Represents a single customer review row."""
    id: str = ""
    date: str = ""
    user_id: str = ""
    review_text: str = ""
    rating: int = 0
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ReviewCollection:
    """A labelled batch of reviews (pre- or post-launch)."""
    reviews: Tuple[Review, ...]
    label: str

    def __post_init__(self):
        object.__setattr__(self, "reviews", tuple(self.reviews))

    @property
    def count(self) -> int:
        return len(self.reviews)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reviews": [r.to_dict() for r in self.reviews],
            "type": self.label,
            "count": self.count,
        }


@dataclass
class SentimentResult:
    """Provider verdict for one review."""
    review_id: str = ""
    sentiment: str = ""
    score: float = 0.0

    # ids sometimes come back as bare numbers
    __pydantic_config__ = ConfigDict(coerce_numbers_to_str=True)


@dataclass(frozen=True)
class ThemeResult:
    """A topic found across both collections; change_rate comes from the provider as-is."""
    theme: str = ""
    pre_count: int = 0
    post_count: int = 0
    change_rate: float = 0.0
    sentiment: str = ""


@dataclass(frozen=True)
class SentimentSummary:
    """Aggregate sentiment counts and average rating for one collection."""
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    average_rating: float = 0.0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral


@dataclass(frozen=True)
class ComparisonResult:
    """Pre vs post launch view."""
    pre_launch_sentiment: SentimentSummary
    post_launch_sentiment: SentimentSummary
    sentiment_shift: float
    themes: Tuple[ThemeResult, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "themes", tuple(self.themes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pre_launch_sentiment": asdict(self.pre_launch_sentiment),
            "post_launch_sentiment": asdict(self.post_launch_sentiment),
            "sentiment_shift": self.sentiment_shift,
            "themes": [asdict(t) for t in self.themes],
        }


@dataclass(frozen=True)
class ImpactSummary:
    """Narrative launch verdict produced by the provider."""
    overall_success: bool = False
    success_score: float = 0.0  # 0-100 as claimed by the provider
    key_improvements: Tuple[str, ...] = ()
    critical_issues: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    executive_summary: str = ""

    def __post_init__(self):
        for name in ("key_improvements", "critical_issues", "recommendations"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in ("key_improvements", "critical_issues", "recommendations"):
            data[name] = list(data[name])
        return data


@dataclass
class SentimentReconciliation:
    """Outcome of matching provider results back to input reviews by id."""
    result_count: int
    review_count: int
    matched: int
    unmatched_result_ids: List[str] = field(default_factory=list)
    missing_review_ids: List[str] = field(default_factory=list)

    @property
    def is_aligned(self) -> bool:
        return not self.unmatched_result_ids and not self.missing_review_ids and self.result_count == self.review_count


@dataclass(frozen=True)
class AnalysisResult:
    """Complete analysis report."""
    pre_launch_reviews: ReviewCollection
    post_launch_reviews: ReviewCollection
    comparison: ComparisonResult
    impact: ImpactSummary
    analyzed_at: str  # RFC 3339

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pre_launch_reviews": self.pre_launch_reviews.to_dict(),
            "post_launch_reviews": self.post_launch_reviews.to_dict(),
            "comparison": self.comparison.to_dict(),
            "impact": self.impact.to_dict(),
            "analyzed_at": self.analyzed_at,
        }


@dataclass
class UploadReceipt:
    """Returned after both review files were accepted."""
    success: bool
    pre_launch_count: int
    post_launch_count: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
