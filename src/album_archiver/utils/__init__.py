# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging configuration, context binding, rich output helpers

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration for interactive and production runs
- Structured logger access with album/pipeline context binding
- Rich tables and progress display for the CLI
"""

from . import logging

__all__ = [
    "logging",
]
