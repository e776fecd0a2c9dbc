# backend/tests/unit/test_interpolator.py
from datetime import datetime

from guidebot.models.context import ContextBundle
from guidebot.workflows.interpolator import (
    build_tokens,
    extract_destinations,
    format_date,
    format_price,
    render,
    render_all,
)


def test_render_none_is_empty():
    assert render(None, {"userName": "지니"}) == ""


def test_render_keeps_unknown_tokens():
    assert render("{userName}님, {packageName} 어떠세요?", {"userName": "지니"}) == "지니님, {packageName} 어떠세요?"


def test_render_coerces_non_string_values():
    assert render("{nights}박", {"nights": 5}) == "5박"


def test_render_none_value_becomes_empty():
    assert render("[{shipName}]", {"shipName": None}) == "[]"


def test_format_price():
    assert format_price(1290000, "가격 문의") == "1,290,000"
    assert format_price(0, "가격 문의") == "가격 문의"
    assert format_price(None, "가격 문의") == "가격 문의"


def test_format_date_korean_short_form():
    assert format_date(datetime(2025, 3, 15), "일정 문의") == "2025. 3. 15."
    assert format_date(None, "일정 문의") == "일정 문의"


def test_extract_destinations_scans_vocabulary_in_order():
    assert extract_destinations("대만 홍콩 크루즈 5박6일") == ["홍콩", "대만"]


def test_extract_destinations_alias_and_dedupe():
    assert extract_destinations("타이완 & 대만 일주") == ["대만"]


def test_extract_destinations_falls_back_to_itinerary():
    assert extract_destinations("지중해 특가", "부산 - 후쿠오카 - 나가사키") == ["후쿠오카", "나가사키"]
    assert extract_destinations("제주 특가", "후쿠오카") == ["제주"]


def test_build_tokens_with_product(product_context):
    tokens = build_tokens(product_context)

    assert tokens["userName"] == "지니"
    assert tokens["basePrice"] == "1,290,000"
    assert tokens["startDate"] == "일정 문의"
    assert tokens["destinations"] == "홍콩, 대만"
    assert tokens["여행지"] == "홍콩, 대만"


def test_build_tokens_without_product_keeps_product_placeholders(bare_context):
    tokens = build_tokens(bare_context)
    rendered = render("{userName}님 {packageName} / {여행지}", tokens)

    assert rendered == "행복♥님 {packageName} / 여행지"


def test_build_tokens_uses_label_overrides(product_context):
    product_context.product.base_price = None
    tokens = build_tokens(product_context, {"PRICE_ON_REQUEST": "상담 후 안내"})

    assert tokens["basePrice"] == "상담 후 안내"


def test_destination_fallback_label_when_list_empty():
    context = ContextBundle(display_name="지니")
    assert build_tokens(context, {"DESTINATION_FALLBACK": "기항지"})["destinations"] == "기항지"


def test_render_all_renders_each_label(product_context):
    tokens = build_tokens(product_context)
    assert render_all(["{여행지} 좋아요", "다른 곳"], tokens) == ["홍콩, 대만 좋아요", "다른 곳"]
