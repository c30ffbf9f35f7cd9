# Imported by alembic so the metadata sees every table
from .base import Base
from .location import Location
from .result_cache_entry import ResultCacheEntry

__all__ = ["Base", "Location", "ResultCacheEntry"]
