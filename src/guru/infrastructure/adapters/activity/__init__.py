# Infrastructure Activity Adapters Package
from .sql_source import SqlActivityDataSource
from .tables import metadata

__all__ = ["SqlActivityDataSource", "metadata"]
