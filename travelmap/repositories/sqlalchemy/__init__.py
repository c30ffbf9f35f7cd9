from .location import SqlAlchemyLocationStore
from .result_cache import SqlAlchemyCacheBackend

__all__ = ["SqlAlchemyCacheBackend", "SqlAlchemyLocationStore"]
