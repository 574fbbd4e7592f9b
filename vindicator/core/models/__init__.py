"""Data models."""

from vindicator.core.models.market import Bar, Sample

__all__ = ["Bar", "Sample"]
