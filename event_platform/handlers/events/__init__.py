"""
Event CQRS APIs

Queries (Read Operations):
- Partition listing and slug-prefix lookups
- Owning-partition resolution by slug alone (FAD, then EVENT)

Commands (Write Operations):
- Conditional create, allow-listed update, hard delete

Usage:
    from .queries import EventReadApi
    from .commands import EventWriteApi

    read_api = EventReadApi(deps.table)
    write_api = EventWriteApi(deps.table)
"""

from .queries import EventReadApi
from .commands import EventWriteApi

__all__ = [
    "EventReadApi",
    "EventWriteApi",
]
