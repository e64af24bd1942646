# ABOUTME: Logging configuration, context binding and progress display
# ABOUTME: Provides loguru sinks plus structlog key/value loggers for the pipeline

from .config import LoggingMode, configure_logging, get_logging_status
from .progress import BatchProgressTracker, create_batch_progress
from .utils import get_logger, log_api_call, with_album_context, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Progress
    "BatchProgressTracker",
    "create_batch_progress",
    # Utilities
    "get_logger",
    "log_api_call",
    "with_album_context",
    "with_pipeline_context",
]
