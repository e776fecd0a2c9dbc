# /guidebot/services/context_service.py

import logging
from typing import Optional

from guidebot.config import strings
from guidebot.models.context import ContextBundle, ProductRecord
from guidebot.services.db_service import db_service
from guidebot.services.string_service import string_service
from guidebot.workflows.interpolator import extract_destinations

logger = logging.getLogger(__name__)


class ContextService:
    """
    Builds the per-call rendering context. Every lookup failure degrades to a
    default (persona name, no product) so resolution always gets a bundle.
    """

    async def resolve(self, product_ref: Optional[str] = None, user_ref: Optional[str] = None) -> ContextBundle:
        display_name = await self._display_name(user_ref)
        product = await self._product(product_ref)

        matched = []
        if product is not None:
            matched = extract_destinations(product.package_name, product.itinerary_pattern)
        destinations = matched or [string_service.get_string("DESTINATION_FALLBACK", strings.DESTINATION_FALLBACK)]

        return ContextBundle(
            display_name=display_name,
            product=product,
            destinations=destinations,
            matched_destinations=matched,
        )

    async def _display_name(self, user_ref: Optional[str]) -> str:
        default_name = string_service.get_string("DEFAULT_USER_NAME", strings.DEFAULT_USER_NAME)
        if not user_ref or not str(user_ref).strip():
            return default_name
        try:
            name = await db_service.get_display_name(str(user_ref).strip())
        except Exception as e:
            logger.warning(f"Display name lookup failed for user {user_ref}: {e}")
            return default_name
        return name or default_name

    async def _product(self, product_ref: Optional[str]) -> Optional[ProductRecord]:
        if not product_ref or not product_ref.strip():
            return None
        code = product_ref.strip().upper()
        try:
            document = await db_service.get_product(code)
            if not document:
                logger.warning(f"Product {code} not found, rendering without product context")
                return None
            return ProductRecord(**document)
        except Exception as e:
            logger.warning(f"Product lookup failed for {code}, rendering without product context: {e}")
            return None


# Globally accessible instance
context_service = ContextService()
