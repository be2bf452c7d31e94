"""Core modules for LaunchLens."""

from .models import *
from .config import settings
from .exceptions import *
from .parsing import parse_reviews, ReviewParser
from .scoring import summarize_sentiments, compute_sentiment_shift, reconcile_sentiments

__all__ = [
    "settings",
    "Review",
    "ReviewCollection",
    "SentimentResult",
    "ThemeResult",
    "SentimentSummary",
    "ComparisonResult",
    "ImpactSummary",
    "AnalysisResult",
    "parse_reviews",
    "ReviewParser",
    "summarize_sentiments",
    "compute_sentiment_shift",
    "reconcile_sentiments",
]
