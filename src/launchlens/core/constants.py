"""Constants and configuration values for LaunchLens."""

# Input Constants
class ReviewColumns:
    """Column names recognised in uploaded review CSVs."""

    ID = "id"
    DATE = "date"
    USER_ID = "user_id"
    REVIEW_TEXT = "review_text"
    RATING = "rating"
    SOURCE = "source"

    ALL = (ID, DATE, USER_ID, REVIEW_TEXT, RATING, SOURCE)

# Collection labels
class CollectionLabels:
    """Labels attached to the two review batches."""

    PRE_LAUNCH = "pre_launch"
    POST_LAUNCH = "post_launch"

# Prompt Constants
class PromptConstants:
    """Constants for LLM prompts and templates."""

    THEME_COUNT = 8  # themes requested from the provider (not enforced on the reply)

    # Sentiment categories the provider is asked to use
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    MAX_RAW_TEXT_IN_LOG = 200  # chars of a bad reply echoed into log lines

# Pipeline stage names (prefixed to errors raised by the orchestrator)
class StageNames:
    """Human-readable names of the failure-prone analysis stages."""

    PRE_SENTIMENT = "failed to analyze pre-launch sentiments"
    POST_SENTIMENT = "failed to analyze post-launch sentiments"
    THEMES = "failed to extract themes"
    IMPACT = "failed to generate impact summary"

# Error Handling Constants
class ErrorConstants:
    """Constants for error handling."""

    MAX_RETRY_ATTEMPTS = 0  # provider calls are never retried
    MISSING_UPLOAD_MESSAGE = "Please upload CSV files first"
    UPLOAD_SUCCESS_MESSAGE = "Files uploaded successfully. Ready for analysis."

# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    CSV_ENCODING = "utf-8-sig"  # tolerates a leading BOM from spreadsheet exports
    REPORT_VERSION = "1.0.0"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
