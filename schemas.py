"""
Database Schemas

Pydantic models describing the MongoDB collections and the request bodies
accepted by the API.

- Lesson -> "lessons" collection
- Order  -> "orders" collection

The request models are intentionally loose: fields are typed ``Any`` so that
values reach the handlers (and the database) exactly as the client sent them.
No schema is enforced on orders; add validation to OrderRequest if stronger
guarantees are ever needed.
"""

import math
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime

# Lessons booking app schemas

class Lesson(BaseModel):
    """
    Lessons offered, seeded directly in the database
    Collection: "lessons"
    """
    subject: str = Field(..., description="Subject name, e.g., Math")
    location: str = Field(..., description="Where the lesson takes place")
    price: float = Field(..., description="Price per lesson")
    spaces: int = Field(..., description="Remaining capacity")
    image: Optional[str] = Field(None, description="Path of the image under /images")

class Order(BaseModel):
    """
    Orders placed from the front-end
    Collection: "orders"
    """
    name: Optional[str] = Field(None, description="Customer name")
    phone: Optional[str] = Field(None, description="Contact phone number")
    items: List[Any] = Field(default_factory=list, description="Booked lessons and quantities")
    total: Optional[float] = Field(None, description="Order total")
    createdAt: datetime = Field(..., description="Set by the server on insert")

# Request bodies

class OrderRequest(BaseModel):
    name: Any = None
    phone: Any = None
    items: Any = None
    total: Any = None

class LessonSpacesUpdate(BaseModel):
    subject: Any = None
    location: Any = None
    spaces: Any = None

    def is_valid(self) -> bool:
        # bool is an int subclass but not a JSON number
        numeric = isinstance(self.spaces, (int, float)) and not isinstance(self.spaces, bool)
        # json.loads accepts NaN and Infinity, which cannot be rendered back out
        numeric = numeric and math.isfinite(self.spaces)
        return bool(self.subject) and bool(self.location) and numeric
