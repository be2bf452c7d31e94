"""Services for LaunchLens."""

from .llm import LLMServiceFactory, ProviderGateway
from .analysis import AnalysisService
from .session import UploadSession

__all__ = [
    "LLMServiceFactory",
    "ProviderGateway",
    "AnalysisService",
    "UploadSession",
]
