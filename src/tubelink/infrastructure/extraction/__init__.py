"""Extraction library setup and page fetching."""

from __future__ import annotations

from .adapter import ExtractionAdapter, ExtractionContext, FetchedPage
from .once import OnceInitializer

__all__ = ["ExtractionAdapter", "ExtractionContext", "FetchedPage", "OnceInitializer"]
