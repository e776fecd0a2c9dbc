# backend/tests/unit/test_context_service.py
import pytest
from unittest.mock import AsyncMock

from guidebot.config import strings
from guidebot.services.context_service import context_service
from guidebot.models.context import ContextBundle


@pytest.fixture
def mock_db(mocker):
    db = mocker.patch("guidebot.services.context_service.db_service")
    db.get_display_name = AsyncMock(return_value=None)
    db.get_product = AsyncMock(return_value=None)
    return db


@pytest.mark.asyncio
async def test_defaults_without_refs(mock_db):
    context = await context_service.resolve(None, None)

    assert context.display_name == strings.DEFAULT_USER_NAME
    assert context.product is None
    assert context.destinations == [strings.DESTINATION_FALLBACK]
    assert context.matched_destinations == []
    mock_db.get_display_name.assert_not_awaited()
    mock_db.get_product.assert_not_awaited()


@pytest.mark.asyncio
async def test_display_name_lookup(mock_db):
    mock_db.get_display_name.return_value = "바다사랑"

    context = await context_service.resolve(None, " 42 ")

    assert context.display_name == "바다사랑"
    mock_db.get_display_name.assert_awaited_once_with("42")


@pytest.mark.asyncio
async def test_display_name_lookup_failure_degrades(mock_db):
    mock_db.get_display_name.side_effect = RuntimeError("connection reset")

    context = await context_service.resolve(None, "42")

    assert context.display_name == strings.DEFAULT_USER_NAME


@pytest.mark.asyncio
async def test_product_code_is_normalised(mock_db):
    mock_db.get_product.return_value = {
        "product_code": "HK2025",
        "package_name": "홍콩 타이완 크루즈",
        "cruise_line": "MSC",
        "ship_name": "벨리시마",
        "nights": 4,
        "days": 5,
    }

    context = await context_service.resolve("  hk2025 ", None)

    mock_db.get_product.assert_awaited_once_with("HK2025")
    assert context.product.product_code == "HK2025"
    assert context.destinations == ["홍콩", "대만"]
    assert context.matched_destinations == ["홍콩", "대만"]


@pytest.mark.asyncio
async def test_missing_product_behaves_like_no_product(mock_db):
    context = await context_service.resolve("NOPE", None)

    assert context.product is None
    assert context.destinations == [strings.DESTINATION_FALLBACK]


@pytest.mark.asyncio
async def test_product_lookup_failure_degrades(mock_db):
    mock_db.get_product.side_effect = RuntimeError("timeout")

    context = await context_service.resolve("HK2025", "42")

    assert context.product is None
    assert context.display_name == strings.DEFAULT_USER_NAME


@pytest.mark.asyncio
async def test_product_without_known_destination_uses_fallback(mock_db):
    mock_db.get_product.return_value = {"product_code": "MED1", "package_name": "지중해 크루즈", "itinerary_pattern": "바르셀로나 - 마르세유"}

    context = await context_service.resolve("MED1", None)

    assert context.product is not None
    assert context.destinations == [strings.DESTINATION_FALLBACK]
    assert context.matched_destinations == []


def test_context_bundle_exposes_product_only_as_field():
    bundle = ContextBundle(display_name="고객")

    assert bundle.product is None
    assert not hasattr(bundle, "has_product")
