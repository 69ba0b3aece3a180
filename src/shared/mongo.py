"""MongoDB connection helpers shared by the domain repositories.

Repositories fall back to protean's configured provider until a database is
bound with ``bind_database()``; after that they read and write the bound
database's collections directly.
"""

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.server_api import ServerApi

_current_database: Database | None = None


def connect(uri: str) -> MongoClient:
    """Create a client pinned to the stable server API (v1, strict)."""
    return MongoClient(
        uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        tz_aware=True,
    )


def bind_database(database: Database) -> None:
    """Route repository reads and writes to ``database``."""
    global _current_database
    _current_database = database


def unbind_database() -> None:
    """Return repositories to the protean provider."""
    global _current_database
    _current_database = None


def collection(name: str) -> Collection | None:
    """Return the bound collection called ``name``, or None when unbound."""
    if _current_database is None:
        return None
    return _current_database[name]


def object_id(value: str) -> ObjectId | None:
    """Parse a document id, returning None for anything that is not an ObjectId."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def id_filter(identifier: str) -> dict:
    """Match a document by its string id or by the ObjectId it spells."""
    oid = object_id(identifier)
    if oid is None:
        return {"_id": identifier}
    return {"_id": {"$in": [identifier, oid]}}
