# /guidebot/routes/chatbot.py

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from guidebot.config import strings
from guidebot.config.settings import settings
from guidebot.models.api import APIResponse
from guidebot.services.flow_service import flow_service, NodeNotFound, FlowNotFound
from guidebot.services.string_service import string_service
from guidebot.utils.metrics import node_resolutions_counter

# Read-only chatbot endpoints: resolve a question node, start a flow, and
# check a flow graph for broken branches.

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat-bot", tags=["Chatbot"])


@router.get("/question/{node_id}", response_model=APIResponse)
async def get_question(
    node_id: int,
    product_code: Optional[str] = Query(None, alias="productCode"),
    partner: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Renders one question node with the caller's context."""
    try:
        resolved = await flow_service.resolve_node(
            node_id, product_ref=product_code, user_ref=user_id, tracking_ref=partner
        )
    except NodeNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        node_resolutions_counter.labels(endpoint="question", status="error").inc()
        logger.error(f"Failed to resolve question {node_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=string_service.get_string("QUESTION_LOAD_FAILED", strings.QUESTION_LOAD_FAILED),
        )

    return APIResponse(
        success=True,
        message="Question resolved",
        data=resolved.model_dump(mode="json"),
        version=settings.api_version,
    )


@router.get("/start", response_model=APIResponse)
async def start_conversation(
    product_code: Optional[str] = Query(None, alias="productCode"),
    share_token: Optional[str] = Query(None, alias="shareToken"),
    flow_id: Optional[int] = Query(None, alias="flowId"),
    preview: bool = Query(False),
    partner: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Picks the starting flow and renders its first question."""
    try:
        started = await flow_service.start_flow(
            product_ref=product_code,
            share_token=share_token,
            flow_id=flow_id,
            preview=preview,
            user_ref=user_id,
            tracking_ref=partner,
        )
    except (FlowNotFound, NodeNotFound) as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        node_resolutions_counter.labels(endpoint="start", status="error").inc()
        logger.error(f"Failed to start chatbot flow: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=string_service.get_string("START_FAILED", strings.START_FAILED),
        )

    return APIResponse(
        success=True,
        message="Flow started",
        data=started.model_dump(mode="json"),
        version=settings.api_version,
    )


@router.get("/flows/{flow_id}/validate", response_model=APIResponse)
async def validate_flow(flow_id: int):
    """Reports shape and reference problems in a flow graph."""
    try:
        report = await flow_service.validate_flow(flow_id)
    except FlowNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Failed to validate flow {flow_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=string_service.get_string("QUESTION_LOAD_FAILED", strings.QUESTION_LOAD_FAILED),
        )

    return APIResponse(
        success=True,
        message="Flow is valid" if report["is_valid"] else "Flow has problems",
        data=dict(report),
        version=settings.api_version,
    )
