# /guidebot/services/flow_service.py

import logging
from typing import Optional

from guidebot.config import strings
from guidebot.config.settings import settings
from guidebot.models.flow import Flow, FlowNode, ResolvedNode, StartedFlow
from guidebot.services.cache_service import cache_service
from guidebot.services.context_service import context_service
from guidebot.services.db_service import db_service
from guidebot.services.media_service import media_service
from guidebot.services.string_service import string_service
from guidebot.utils.metrics import node_resolutions_counter
from guidebot.workflows.engine import render_node
from guidebot.workflows.terminal import compose_terminal
from guidebot.workflows.validator import FlowReport, validate_flow_graph

logger = logging.getLogger(__name__)

PAYMENT_PAGE = "/products/{code}/payment"


class NodeNotFound(Exception):
    """The requested (or starting) node does not exist."""

    def __init__(self, message: str = strings.QUESTION_NOT_FOUND):
        super().__init__(message)
        self.message = message


class FlowNotFound(Exception):
    """No flow matches the request."""

    def __init__(self, message: str = strings.FLOW_NOT_FOUND):
        super().__init__(message)
        self.message = message


class FlowService:
    """
    Store-backed orchestration of node resolution: loads the node and its flow,
    builds the context and hands both to the rendering engine.
    """

    async def _load_flow(self, flow_id: int) -> Optional[Flow]:
        document = await cache_service.get_or_set(
            f"guidebot:flow:{flow_id}",
            lambda: db_service.get_flow(flow_id),
            ttl=settings.flow_cache_ttl,
        )
        return Flow(**document) if document else None

    async def resolve_node(
        self,
        node_id: int,
        product_ref: Optional[str] = None,
        user_ref: Optional[str] = None,
        tracking_ref: Optional[str] = None,
    ) -> ResolvedNode:
        """
        Resolve one node for a client.

        Args:
            node_id: Node to render
            product_ref: Product code the conversation is about, if any
            user_ref: User id used for the greeting name, if any
            tracking_ref: Partner reference carried onto the terminal URL

        Returns:
            The rendered node

        Raises:
            NodeNotFound: when the node or its flow does not exist
        """
        document = await db_service.get_node(node_id)
        if not document:
            node_resolutions_counter.labels(endpoint="question", status="not_found").inc()
            raise NodeNotFound(string_service.get_string("QUESTION_NOT_FOUND", strings.QUESTION_NOT_FOUND))
        node = FlowNode(**document)

        flow = await self._load_flow(node.flow_id)
        if flow is None:
            logger.warning(f"Node {node_id} belongs to missing flow {node.flow_id}")
            node_resolutions_counter.labels(endpoint="question", status="not_found").inc()
            raise NodeNotFound(string_service.get_string("QUESTION_NOT_FOUND", strings.QUESTION_NOT_FOUND))

        context = await context_service.resolve(product_ref, user_ref)
        resolved = await render_node(
            node, flow, context, media_service,
            tracking_ref=tracking_ref,
            labels=string_service.labels(),
        )
        node_resolutions_counter.labels(endpoint="question", status="success").inc()
        return resolved

    async def start_flow(
        self,
        product_ref: Optional[str] = None,
        share_token: Optional[str] = None,
        flow_id: Optional[int] = None,
        preview: bool = False,
        user_ref: Optional[str] = None,
        tracking_ref: Optional[str] = None,
    ) -> StartedFlow:
        """
        Pick the starting flow and render its first node.

        When a product resolved, the conversation ends on that product's
        payment page instead of the flow's own destination.

        Raises:
            FlowNotFound: when no flow qualifies
            NodeNotFound: when the chosen flow has no start node
        """
        document = await db_service.find_start_flow(
            settings.flow_category, flow_id=flow_id, preview=preview, share_token=share_token
        )
        if not document:
            node_resolutions_counter.labels(endpoint="start", status="not_found").inc()
            raise FlowNotFound(string_service.get_string("FLOW_NOT_FOUND", strings.FLOW_NOT_FOUND))
        flow = Flow(**document)

        node_document = None
        if flow.start_node_id is not None:
            node_document = await db_service.get_node(flow.start_node_id)
        if not node_document:
            node_document = await db_service.get_first_active_node(flow.id)
        if not node_document:
            node_resolutions_counter.labels(endpoint="start", status="not_found").inc()
            raise NodeNotFound(string_service.get_string("START_QUESTION_NOT_FOUND", strings.START_QUESTION_NOT_FOUND))
        node = FlowNode(**node_document)

        context = await context_service.resolve(product_ref, user_ref)
        terminal_base = flow.terminal_destination
        if context.product is not None:
            terminal_base = PAYMENT_PAGE.format(code=context.product.product_code.upper())

        resolved = await render_node(
            node, flow, context, media_service,
            tracking_ref=tracking_ref,
            labels=string_service.labels(),
            terminal_override=terminal_base,
        )
        node_resolutions_counter.labels(endpoint="start", status="success").inc()
        logger.info(f"Started flow {flow.id} at node {node.id} (preview={preview}, shared={bool(share_token)})")

        return StartedFlow(
            flow_id=flow.id,
            node=resolved,
            terminal_destination=compose_terminal(terminal_base, tracking_ref),
            product_info=context.product.summary() if context.product else None,
            user_name=context.display_name,
        )

    async def validate_flow(self, flow_id: int) -> FlowReport:
        """
        Check a stored flow graph for shape and reference problems.

        Raises:
            FlowNotFound: when the flow does not exist
        """
        document = await db_service.get_flow(flow_id)
        if not document:
            raise FlowNotFound(string_service.get_string("FLOW_NOT_FOUND", strings.FLOW_NOT_FOUND))
        flow = Flow(**document)
        nodes = [FlowNode(**d) for d in await db_service.get_flow_nodes(flow_id)]
        report = validate_flow_graph(flow, nodes)
        if not report["is_valid"]:
            logger.warning(f"Flow {flow_id} has {len(report['errors'])} graph problems")
        return report


# Globally accessible instance
flow_service = FlowService()
