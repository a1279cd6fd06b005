"""
Document store clients.

The services talk to a small document-store interface (get / set / update /
delete one field / add / find by field) so the same code runs against MongoDB
in production and against process memory in development and tests.

The client is created once at application startup (see lifespan in main.py),
stored on app.state and handed to the services through FastAPI dependencies.
"""

import copy
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from taskboard.config import Settings
from taskboard.errors import StoreError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DocumentStore:
    """
    Interface shared by all store clients.

    Documents are flat dicts addressed by (collection, doc_id). Writes that
    touch a single top-level field never rewrite the rest of the document.
    """

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document, or None if it does not exist."""
        raise NotImplementedError

    async def set(self, collection: str, doc_id: str, data: Document, merge: bool = False) -> None:
        """
        Write a document, creating it if absent.
        merge=True sets only the given top-level fields and keeps the others.
        """
        raise NotImplementedError

    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        """Set the given top-level fields on an existing document. False if it does not exist."""
        raise NotImplementedError

    async def delete_field(self, collection: str, doc_id: str, field: str) -> bool:
        """Remove one top-level field from an existing document. False if it does not exist."""
        raise NotImplementedError

    async def add(self, collection: str, data: Document) -> str:
        """Insert a document under a generated id and return the id."""
        raise NotImplementedError

    async def find_one(self, collection: str, field: str, value: Any) -> Optional[Tuple[str, Document]]:
        """Return (doc_id, document) for the first document whose field equals value."""
        raise NotImplementedError

    async def close(self) -> None:
        pass


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store. Every read and write copies the data so callers never
    share mutable state with the store.
    """

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Document]] = {}

    def reset(self) -> None:
        self.collections.clear()

    def _collection(self, name: str) -> Dict[str, Document]:
        return self.collections.setdefault(name, {})

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, collection: str, doc_id: str, data: Document, merge: bool = False) -> None:
        docs = self._collection(collection)
        if merge and doc_id in docs:
            docs[doc_id].update(copy.deepcopy(data))
        else:
            docs[doc_id] = copy.deepcopy(data)

    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        docs = self._collection(collection)
        if doc_id not in docs:
            return False
        docs[doc_id].update(copy.deepcopy(fields))
        return True

    async def delete_field(self, collection: str, doc_id: str, field: str) -> bool:
        docs = self._collection(collection)
        if doc_id not in docs:
            return False
        docs[doc_id].pop(field, None)
        return True

    async def add(self, collection: str, data: Document) -> str:
        doc_id = uuid.uuid4().hex
        self._collection(collection)[doc_id] = copy.deepcopy(data)
        return doc_id

    async def find_one(self, collection: str, field: str, value: Any) -> Optional[Tuple[str, Document]]:
        for doc_id, doc in self._collection(collection).items():
            if doc.get(field) == value:
                return doc_id, copy.deepcopy(doc)
        return None


@contextmanager
def _wrap_driver_errors(operation: str, collection: str) -> Iterator[None]:
    """Re-raise driver failures as StoreError so the API layer can map them to 500."""
    try:
        yield
    except PyMongoError as e:
        raise StoreError(f"MongoDB {operation} on '{collection}' failed: {e}") from e


def _strip_id(doc: Document) -> Document:
    doc.pop("_id", None)
    return doc


class MongoDocumentStore(DocumentStore):
    """
    MongoDB implementation on Motor. The document id is stored in _id and
    removed from documents returned to callers.
    """

    def __init__(self, database: AsyncIOMotorDatabase, client: Optional[AsyncIOMotorClient] = None) -> None:
        self.database = database
        self.client = client

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with _wrap_driver_errors("get", collection):
            doc = await self.database[collection].find_one({"_id": doc_id})
        return _strip_id(doc) if doc is not None else None

    async def set(self, collection: str, doc_id: str, data: Document, merge: bool = False) -> None:
        with _wrap_driver_errors("set", collection):
            if merge:
                await self.database[collection].update_one({"_id": doc_id}, {"$set": data}, upsert=True)
            else:
                await self.database[collection].replace_one({"_id": doc_id}, data, upsert=True)

    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        with _wrap_driver_errors("update", collection):
            result = await self.database[collection].update_one({"_id": doc_id}, {"$set": fields})
        return result.matched_count > 0

    async def delete_field(self, collection: str, doc_id: str, field: str) -> bool:
        with _wrap_driver_errors("delete_field", collection):
            result = await self.database[collection].update_one({"_id": doc_id}, {"$unset": {field: ""}})
        return result.matched_count > 0

    async def add(self, collection: str, data: Document) -> str:
        with _wrap_driver_errors("add", collection):
            result = await self.database[collection].insert_one(dict(data))
        return str(result.inserted_id)

    async def find_one(self, collection: str, field: str, value: Any) -> Optional[Tuple[str, Document]]:
        with _wrap_driver_errors("find_one", collection):
            doc = await self.database[collection].find_one({field: value})
        if doc is None:
            return None
        doc_id = str(doc["_id"])
        return doc_id, _strip_id(doc)

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()


def connect_document_store(settings: Settings) -> DocumentStore:
    """
    Build the store client selected by configuration.
    Called once at application startup.
    """
    if settings.use_in_memory_store:
        logger.info("Using in-memory document store.")
        return InMemoryDocumentStore()

    client = AsyncIOMotorClient(settings.mongodb_url)
    database = client[settings.mongodb_database]
    logger.info("MongoDB client created for database %s.", settings.mongodb_database)
    return MongoDocumentStore(database, client=client)


async def close_document_store(store: DocumentStore) -> None:
    """Close the store client on application shutdown."""
    logger.info("Closing document store.")
    await store.close()
