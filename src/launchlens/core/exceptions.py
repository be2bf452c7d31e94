"""Error types raised by LaunchLens."""

import copy
from typing import Optional


class LaunchLensError(Exception):
    """Base class for every error raised by the package."""


class ConfigurationError(LaunchLensError):
    """Settings are missing or unusable (e.g. no provider API key)."""


class InputError(LaunchLensError):
    """Problem with data supplied by the caller; never retried."""


class MalformedInputError(InputError):
    """Uploaded CSV could not be parsed.

    ``line`` is the 1-based line number of the offending record, or ``None``
    when the failure is not tied to a line (missing header).
    """

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class MissingUploadError(InputError):
    """Analysis was requested before both review files were uploaded."""


class ProviderError(LaunchLensError):
    """Failure talking to, or understanding, the inference provider.

    The orchestrator attaches the pipeline stage via :meth:`with_stage`; the
    error kind itself never changes on the way up.
    """

    def __init__(self, message: str, *, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def with_stage(self, stage: str) -> "ProviderError":
        clone = copy.copy(self)
        clone.stage = stage
        return clone

    def __str__(self) -> str:
        if self.stage:
            return f"{self.stage}: {self.message}"
        return self.message


class ProviderTransportError(ProviderError):
    """Network failure or an HTTP error without a structured error body."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, stage: Optional[str] = None):
        super().__init__(message, stage=stage)
        self.status_code = status_code


class ProviderAPIError(ProviderError):
    """The provider answered with an error object."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, stage: Optional[str] = None):
        super().__init__(message, stage=stage)
        self.status_code = status_code


class ProviderEmptyResponseError(ProviderError):
    """The completion carried no choices."""


class ProviderMalformedJSONError(ProviderError):
    """Sanitized reply did not parse into the expected JSON shape."""

    def __init__(self, message: str, *, raw_text: str = "", stage: Optional[str] = None):
        super().__init__(f"{message}, response: {raw_text}", stage=stage)
        self.raw_text = raw_text
