"""Locale passed to the extraction library at initialization."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Locale:
    language: str = "en"
    country: str = "US"

    @property
    def tag(self) -> str:
        """BCP 47 style tag, e.g. ``en-US``."""
        return f"{self.language}-{self.country}" if self.country else self.language
