# Keyword research adapters
# DataForSEO Labs integration

from .dataforseo_adapter import DataForSEOAdapter

__all__ = [
    "DataForSEOAdapter",
]
