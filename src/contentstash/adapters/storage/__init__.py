"""Content storage adapters."""

from contentstash.adapters.storage.filesystem import ContentStore


__all__ = ["ContentStore"]
