# /guidebot/services/media_service.py

import logging
from itertools import islice
from typing import Dict, Iterator, List, Sequence

from guidebot.models.context import MediaAsset, Testimonial
from guidebot.services.db_service import db_service

# Media lookups used by content augmentation. The photo catalog is small and
# static, so it is loaded once at startup and served from memory; reviews are
# read from the database on every call.

logger = logging.getLogger(__name__)

MEDIA_KINDS = ("destination", "cruise_review", "room")


def asset_matches(asset: MediaAsset, hints: Sequence[str]) -> bool:
    """An asset matches when one of its tags occurs in a hint (case-insensitive)."""
    if not hints:
        return True
    lowered = [h.lower() for h in hints if h]
    return any(tag and tag.lower() in hint for tag in asset.tags for hint in lowered)


class MediaService:
    def __init__(self):
        self._catalog: Dict[str, List[MediaAsset]] = {kind: [] for kind in MEDIA_KINDS}

    async def load_catalog(self):
        """Loads the media catalog from the database, keeping the old one on failure."""
        logger.info("Loading media catalog...")
        try:
            documents = await db_service.get_media_assets()
        except Exception as e:
            logger.error(f"Failed to load media catalog: {e}", exc_info=True)
            return

        catalog: Dict[str, List[MediaAsset]] = {kind: [] for kind in MEDIA_KINDS}
        for document in documents:
            kind = document.get("kind")
            if kind not in catalog or not document.get("url"):
                continue
            catalog[kind].append(MediaAsset(**document))
        self._catalog = catalog
        logger.info(f"Media catalog loaded: { {k: len(v) for k, v in catalog.items()} }")

    def set_catalog(self, assets: Sequence[MediaAsset]):
        catalog: Dict[str, List[MediaAsset]] = {kind: [] for kind in MEDIA_KINDS}
        for asset in assets:
            catalog.setdefault(asset.kind, []).append(asset)
        self._catalog = catalog

    def _select(self, kind: str, hints: Sequence[str], count: int) -> Iterator[MediaAsset]:
        matching = (a for a in self._catalog.get(kind, []) if asset_matches(a, hints))
        return islice(matching, max(count, 0))

    def destination_images(self, hints: Sequence[str], count: int) -> Iterator[MediaAsset]:
        return self._select("destination", hints, count)

    def cruise_review_images(self, hints: Sequence[str], count: int) -> Iterator[MediaAsset]:
        return self._select("cruise_review", hints, count)

    def room_images(self, hints: Sequence[str], count: int) -> Iterator[MediaAsset]:
        return self._select("room", hints, count)

    async def recent_testimonials(self, limit: int) -> List[Testimonial]:
        """Newest approved reviews with photos, at most `limit`."""
        documents = await db_service.get_recent_testimonials(limit)
        reviews = [Testimonial.from_document(d) for d in documents]
        return [r for r in reviews if r.has_images][:limit]


# Globally accessible instance
media_service = MediaService()
