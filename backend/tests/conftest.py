from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from dotenv import load_dotenv
from unittest.mock import AsyncMock

# Load the test environment before anything imports guidebot.config.settings.
load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env.test")

from guidebot.main import app  # noqa: E402
from guidebot.models.context import ContextBundle, MediaAsset, ProductRecord  # noqa: E402
from guidebot.models.flow import Flow, FlowNode  # noqa: E402
from guidebot.services.media_service import MediaService  # noqa: E402


@pytest.fixture(scope="function")
def test_client(mocker):
    """
    TestClient for API tests. Startup I/O (indexes, string overrides, media
    catalog) is patched out so no MongoDB is needed.
    """
    mocker.patch("guidebot.utils.lifecycle.db_service.create_indexes", new_callable=AsyncMock)
    mocker.patch("guidebot.utils.lifecycle.string_service.load_strings", new_callable=AsyncMock)
    mocker.patch("guidebot.utils.lifecycle.media_service.load_catalog", new_callable=AsyncMock)

    with TestClient(app) as client:
        yield client


@pytest.fixture
def hongkong_product():
    return ProductRecord(
        product_code="HK2025",
        package_name="홍콩 대만 크루즈 5박 6일",
        cruise_line="MSC 크루즈",
        ship_name="MSC 벨리시마",
        nights=5,
        days=6,
        base_price=1290000,
    )


@pytest.fixture
def product_context(hongkong_product):
    return ContextBundle(
        display_name="지니",
        product=hongkong_product,
        destinations=["홍콩", "대만"],
        matched_destinations=["홍콩", "대만"],
    )


@pytest.fixture
def bare_context():
    return ContextBundle(display_name="행복♥", destinations=["여행지"])


@pytest.fixture
def media_source(mocker):
    """In-memory media catalog with reviews mocked to an empty list."""
    service = MediaService()
    service.set_catalog([
        MediaAsset(url="https://cdn.example.com/hk-harbour.jpg", title="홍콩 야경", kind="cruise_review", tags=["홍콩"]),
        MediaAsset(url="https://cdn.example.com/bellissima-deck.jpg", title="벨리시마 갑판", kind="cruise_review", tags=["벨리시마"]),
        MediaAsset(url="https://cdn.example.com/generic-1.jpg", title=None, kind="cruise_review", tags=["크루즈"]),
        MediaAsset(url="https://cdn.example.com/generic-2.jpg", title=None, kind="cruise_review", tags=["크루즈"]),
        MediaAsset(url="https://cdn.example.com/hk-peak.jpg", title="빅토리아 피크", kind="destination", tags=["홍콩"]),
        MediaAsset(url="https://cdn.example.com/taipei.jpg", title="타이베이", kind="destination", tags=["대만"]),
        MediaAsset(url="https://cdn.example.com/dest-generic.jpg", title=None, kind="destination", tags=["크루즈"]),
        MediaAsset(url="https://cdn.example.com/room-1.jpg", title="발코니", kind="room", tags=["코스타 세레나"]),
    ])
    mocker.patch.object(service, "recent_testimonials", new_callable=AsyncMock, return_value=[])
    return service


@pytest.fixture
def guide_flow():
    return Flow(id=1, name="구매 가이드", category="AI 지니 채팅봇(구매)", terminal_destination="/offer", start_node_id=1, is_active=True)


def make_node(node_id, position, **fields):
    """FlowNode with sensible defaults for tests."""
    fields.setdefault("flow_id", 1)
    fields.setdefault("question_text", f"질문 {node_id}")
    return FlowNode(id=node_id, position=position, **fields)


@pytest.fixture
def node_factory():
    return make_node
