"""
Layoffs: cleaning and exploration of company layoff records.

This package provides ingestion, deduplication, normalization and
reporting for a flat dataset of layoff events.
"""

from importlib.metadata import version

__version__ = version("layoffs")

__all__ = ["__version__"]
