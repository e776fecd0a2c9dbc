# /guidebot/models/context.py

import json
import logging
from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field

# Read-side records fed into template rendering and content augmentation.
# None of these are persisted by the resolver.

logger = logging.getLogger(__name__)


class ProductRecord(BaseModel):
    product_code: str
    package_name: str = ""
    cruise_line: str = ""
    ship_name: str = ""
    nights: int = 0
    days: int = 0
    base_price: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    itinerary_pattern: Optional[str] = None

    def summary(self) -> Dict[str, Any]:
        """Product facts returned to the client when a flow starts."""
        return {
            "productCode": self.product_code,
            "packageName": self.package_name,
            "cruiseLine": self.cruise_line,
            "shipName": self.ship_name,
            "nights": self.nights,
            "days": self.days,
            "basePrice": self.base_price,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "itineraryPattern": self.itinerary_pattern or "",
        }


class ContextBundle(BaseModel):
    """Per-call rendering context. Built once per resolution and discarded."""
    display_name: str
    product: Optional[ProductRecord] = None
    destinations: List[str] = Field(default_factory=list)
    matched_destinations: List[str] = Field(
        default_factory=list,
        description="Destinations actually recognised in the product; empty when only the fallback applies",
    )


class MediaAsset(BaseModel):
    url: str
    title: Optional[str] = None
    kind: str
    tags: List[str] = Field(default_factory=list)


class Testimonial(BaseModel):
    author_name: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    rating: int = 5
    created_at: Optional[datetime] = None
    images: List[str] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Testimonial":
        """
        Builds a Testimonial from a review document. Images may be stored either
        as a list or as a JSON-encoded string; a malformed value yields no images.
        """
        raw_images = document.get("images")
        images: List[str] = []
        if isinstance(raw_images, list):
            images = raw_images
        elif isinstance(raw_images, str):
            try:
                parsed = json.loads(raw_images)
                images = parsed if isinstance(parsed, list) else []
            except json.JSONDecodeError:
                logger.debug(f"Unparseable images field on review {document.get('_id')}")
        images = [img for img in images if isinstance(img, str) and img.strip()]

        rating = document.get("rating") or 5
        try:
            rating = max(1, min(5, int(rating)))
        except (TypeError, ValueError):
            rating = 5

        return cls(
            author_name=document.get("author_name"),
            title=document.get("title"),
            body=document.get("content") or document.get("body"),
            rating=rating,
            created_at=document.get("created_at"),
            images=images,
        )

    @property
    def has_images(self) -> bool:
        return len(self.images) > 0
