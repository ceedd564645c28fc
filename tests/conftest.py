from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bson import ObjectId

from config import Settings
from database import Database
from tests.fakes import FakeCollection

ALLOWED_ORIGIN = "https://lessons.example.org"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        mongo_uri="mongodb://localhost:27017",
        db_name="educate_app_test",
        cors_origin=ALLOWED_ORIGIN,
        images_dir=tmp_path / "images",
    )


@pytest.fixture()
def lessons() -> FakeCollection:
    return FakeCollection(
        [
            {
                "_id": ObjectId(),
                "subject": "Math",
                "location": "London",
                "price": 100,
                "spaces": 5,
                "image": "math.png",
            },
            {
                "_id": ObjectId(),
                "subject": "Math",
                "location": "Oxford",
                "price": 90,
                "spaces": 5,
                "image": "math.png",
            },
            {
                "_id": ObjectId(),
                "subject": "Music",
                "location": "London",
                "price": 80,
                "spaces": 2,
                "image": "music.png",
            },
        ]
    )


@pytest.fixture()
def orders() -> FakeCollection:
    return FakeCollection()


@pytest.fixture()
def database(lessons: FakeCollection, orders: FakeCollection) -> Database:
    return Database(lessons, orders)
