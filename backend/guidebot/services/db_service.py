# /guidebot/services/db_service.py

import logging
import re
from motor.motor_asyncio import AsyncIOMotorClient
from typing import List, Optional, Dict, Any, Awaitable, Callable

from guidebot.config.settings import settings
from guidebot.utils.metrics import database_operations_counter

logger = logging.getLogger(__name__)

# Constants
DEFAULT_QUERY_LIMIT = 500
FLOW_NODE_LIMIT = 1000


class DatabaseService:
    """
    Read-only access to the chatbot collections in MongoDB: flows, their
    question nodes, cruise products, users, customer reviews, media assets
    and string overrides.

    Lookup errors are counted and re-raised; callers decide whether a failure
    degrades (context, media) or fails the request (nodes, flows).
    """

    def __init__(self, mongo_uri: str):
        try:
            self.client = AsyncIOMotorClient(
                mongo_uri,
                maxPoolSize=settings.max_pool_size,
                minPoolSize=settings.min_pool_size,
                tls=settings.mongo_ssl,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000
            )
            self.db = self.client.get_default_database()
            logger.info("MongoDB client initialized successfully.")
        except Exception as e:
            logger.error(f"Error initializing MongoDB client: {e}")
            raise

    # ==================== Helper Methods ====================

    def _strip_id(self, document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Drop Mongo's ObjectId so documents can be cached as JSON and fed to pydantic."""
        if document is not None:
            document.pop("_id", None)
        return document

    async def _tracked(self, name: str, operation: Callable[[], Awaitable[Any]]) -> Any:
        """
        Run a lookup with success/failure counters.

        Args:
            name: Operation label for database_operations_total
            operation: Async callable performing the query

        Returns:
            The query result; exceptions propagate after being counted
        """
        try:
            result = await operation()
        except Exception as e:
            database_operations_counter.labels(operation=name, status="failed").inc()
            logger.error(f"Database operation {name} failed: {type(e).__name__}: {e}")
            raise
        database_operations_counter.labels(operation=name, status="success").inc()
        return result

    # ==================== Index Management ====================

    async def create_indexes(self) -> None:
        """Create the lookup indexes used by the resolver."""
        indexes = [
            ("chatbot_flows", [("id", 1)], {"unique": True}),
            ("chatbot_flows", [("category", 1), ("is_active", 1), ("order", 1)], {}),
            ("chatbot_flows", [("share_token", 1)], {"sparse": True}),
            ("chatbot_questions", [("id", 1)], {"unique": True}),
            ("chatbot_questions", [("flow_id", 1), ("position", 1)], {}),
            ("products", [("product_code", 1)], {"unique": True}),
            ("users", [("id", 1)], {"unique": True}),
            ("reviews", [("is_approved", 1), ("is_deleted", 1), ("created_at", -1)], {}),
            ("media_assets", [("kind", 1)], {}),
            ("strings", [("key", 1)], {"unique": True}),
        ]

        for collection, keys, options in indexes:
            try:
                await self.db[collection].create_index(keys, **options)
                logger.debug(f"Created index on {collection}: {keys}")
            except Exception as e:
                logger.error(f"Failed to create index on {collection} {keys}: {e}")

        logger.info("Database indexes created successfully.")

    async def health_check(self) -> bool:
        """
        Check MongoDB connection health.

        Returns:
            True if connection is healthy
        """
        try:
            await self.client.admin.command('ping')
            return True
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            return False

    # ==================== Flow Graph ====================

    async def get_node(self, node_id: int) -> Optional[Dict[str, Any]]:
        """Question node by id, or None."""
        document = await self._tracked(
            "get_node", lambda: self.db.chatbot_questions.find_one({"id": node_id})
        )
        return self._strip_id(document)

    async def get_flow(self, flow_id: int) -> Optional[Dict[str, Any]]:
        """Flow by id, active or not, or None."""
        document = await self._tracked(
            "get_flow", lambda: self.db.chatbot_flows.find_one({"id": flow_id})
        )
        return self._strip_id(document)

    async def find_start_flow(
        self,
        category: str,
        flow_id: Optional[int] = None,
        preview: bool = False,
        share_token: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Pick the flow a conversation starts in.

        Order: the previewed flow (inactive allowed), then the public flow
        behind a share token, then the first active flow by `order`. All
        lookups are restricted to the given category.

        Args:
            category: Flow category to search in
            flow_id: Flow to preview
            preview: Whether preview mode was requested
            share_token: Public share token

        Returns:
            Flow document or None
        """
        if preview and flow_id is not None:
            document = await self._tracked(
                "find_preview_flow",
                lambda: self.db.chatbot_flows.find_one({"id": flow_id, "category": category}),
            )
            if document:
                return self._strip_id(document)

        if share_token:
            document = await self._tracked(
                "find_shared_flow",
                lambda: self.db.chatbot_flows.find_one({
                    "share_token": share_token,
                    "is_public": True,
                    "is_active": True,
                    "category": category,
                }),
            )
            if document:
                return self._strip_id(document)

        document = await self._tracked(
            "find_active_flow",
            lambda: self.db.chatbot_flows.find_one(
                {"is_active": True, "category": category},
                sort=[("order", 1), ("id", 1)],
            ),
        )
        return self._strip_id(document)

    async def get_first_active_node(self, flow_id: int) -> Optional[Dict[str, Any]]:
        """Lowest-position active node of a flow."""
        document = await self._tracked(
            "get_first_active_node",
            lambda: self.db.chatbot_questions.find_one(
                {"flow_id": flow_id, "is_active": True},
                sort=[("position", 1), ("id", 1)],
            ),
        )
        return self._strip_id(document)

    async def get_flow_nodes(self, flow_id: int) -> List[Dict[str, Any]]:
        """All nodes of a flow ordered by position."""
        documents = await self._tracked(
            "get_flow_nodes",
            lambda: self.db.chatbot_questions.find({"flow_id": flow_id})
            .sort([("position", 1), ("id", 1)])
            .to_list(length=FLOW_NODE_LIMIT),
        )
        return [self._strip_id(d) for d in documents]

    # ==================== Context ====================

    async def get_product(self, product_code: str) -> Optional[Dict[str, Any]]:
        """Cruise product by code. Codes are stored upper-case."""
        code = product_code.strip().upper()
        document = await self._tracked(
            "get_product", lambda: self.db.products.find_one({"product_code": code})
        )
        return self._strip_id(document)

    async def get_display_name(self, user_ref: str) -> Optional[str]:
        """
        Name to greet a user with: the mall nickname when set, else the account name.

        Args:
            user_ref: User id as given by the client (numeric ids are matched as ints too)

        Returns:
            The display name, or None when the user is unknown or has no name
        """
        candidates: List[Any] = [user_ref]
        if re.fullmatch(r"\d+", user_ref):
            candidates.append(int(user_ref))

        user = await self._tracked(
            "get_display_name",
            lambda: self.db.users.find_one(
                {"id": {"$in": candidates}}, projection={"mall_nickname": 1, "name": 1}
            ),
        )
        if not user:
            return None
        return (user.get("mall_nickname") or "").strip() or (user.get("name") or "").strip() or None

    async def get_recent_testimonials(self, limit: int) -> List[Dict[str, Any]]:
        """
        Newest approved reviews that carry at least one image.

        Over-fetches by settings.testimonial_fetch_factor because the image
        filter runs after the query (images may be stored as JSON strings).
        """
        documents = await self._tracked(
            "get_recent_testimonials",
            lambda: self.db.reviews.find({"is_approved": True, "is_deleted": {"$ne": True}})
            .sort("created_at", -1)
            .to_list(length=limit * settings.testimonial_fetch_factor),
        )
        return [self._strip_id(d) for d in documents]

    async def get_media_assets(self) -> List[Dict[str, Any]]:
        """Whole media catalog (destination, cruise review and room photos)."""
        documents = await self._tracked(
            "get_media_assets",
            lambda: self.db.media_assets.find({}).to_list(length=None),
        )
        return [self._strip_id(d) for d in documents]

    # ==================== Strings Manager ====================

    async def get_all_strings(self) -> List[Dict[str, Any]]:
        """
        Get all string overrides.

        Returns:
            List of {key, value} documents
        """
        strings = await self.db.strings.find({}).to_list(length=DEFAULT_QUERY_LIMIT)
        return [self._strip_id(s) for s in strings]


# Globally accessible instance
db_service = DatabaseService(settings.mongo_uri)
