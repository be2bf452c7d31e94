"""LaunchLens - AI-powered pre/post launch review comparison."""

__version__ = "1.0.0"
__author__ = "LaunchLens Team"

from .core.models import *
from .core.config import settings
from .services.llm import LLMServiceFactory
from .services.analysis import AnalysisService
from .services.session import UploadSession

__all__ = [
    "settings",
    "LLMServiceFactory",
    "AnalysisService",
    "UploadSession",
]
