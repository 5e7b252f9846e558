"""
Local database backend for the event store and social graph.
"""

from pickup.integrations.database.adapter import DatabaseAdapter
from pickup.integrations.database.event_store import SQLAlchemyEventStore
from pickup.integrations.database.social_graph import SQLAlchemySocialGraph

__all__ = [
    "DatabaseAdapter",
    "SQLAlchemyEventStore",
    "SQLAlchemySocialGraph",
]
