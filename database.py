"""
Database

Thin data-access context over the two MongoDB collections used by the API.
A single instance is created at startup and handed to the FastAPI app; route
handlers reach it through the get_database dependency.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request
from pymongo import MongoClient

logger = logging.getLogger(__name__)

LESSONS = "lessons"
ORDERS = "orders"


class Database:
    def __init__(self, lessons, orders, client: Optional[MongoClient] = None):
        self.lessons = lessons
        self.orders = orders
        self.client = client

    @classmethod
    def connect(cls, uri: str, name: str) -> "Database":
        client = MongoClient(uri)
        # MongoClient connects lazily; ping so an unreachable server fails here
        client.admin.command("ping")
        db = client[name]
        logger.info("Connected to MongoDB -> Database: %s", name)
        return cls(db[LESSONS], db[ORDERS], client=client)

    def collection(self, name: str):
        if name == LESSONS:
            return self.lessons
        if name == ORDERS:
            return self.orders
        raise KeyError(f"Unknown collection: {name}")

    def get_documents(self, collection_name: str) -> List[Dict[str, Any]]:
        return list(self.collection(collection_name).find({}))

    def create_document(self, collection_name: str, data: Dict[str, Any]) -> str:
        document = dict(data)
        document["createdAt"] = datetime.now(timezone.utc)
        result = self.collection(collection_name).insert_one(document)
        return str(result.inserted_id)

    def update_lesson_spaces(self, subject: Any, location: Any, spaces: Any) -> int:
        """Overwrite ``spaces`` on the lesson keyed by (subject, location).

        Returns the number of matched documents (0 or 1).
        """
        result = self.lessons.update_one(
            {"subject": subject, "location": location},
            {"$set": {"spaces": spaces}},
        )
        return result.matched_count

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


def get_database(request: Request) -> Database:
    return request.app.state.database
