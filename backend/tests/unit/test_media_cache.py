# backend/tests/unit/test_media_cache.py
import json
import pytest
from unittest.mock import AsyncMock

from guidebot.models.context import MediaAsset, Testimonial
from guidebot.services.cache_service import CacheService
from guidebot.services.media_service import MediaService, asset_matches


def test_asset_matches_tag_inside_hint():
    asset = MediaAsset(url="u", kind="cruise_review", tags=["Bellissima"])
    assert asset_matches(asset, ["MSC BELLISSIMA"])
    assert not asset_matches(asset, ["코스타 세레나"])
    assert asset_matches(asset, [])


def test_providers_are_lazy_and_bounded():
    service = MediaService()
    service.set_catalog([MediaAsset(url=f"u{i}", kind="destination", tags=["홍콩"]) for i in range(10)])

    images = service.destination_images(["홍콩"], 3)

    assert iter(images) is images
    assert [a.url for a in images] == ["u0", "u1", "u2"]
    assert list(images) == []


@pytest.mark.asyncio
async def test_load_catalog_groups_by_kind(mocker):
    mocker.patch("guidebot.services.media_service.db_service.get_media_assets", new_callable=AsyncMock, return_value=[
        {"url": "a.jpg", "kind": "room", "tags": ["세레나"]},
        {"url": "b.jpg", "kind": "poster", "tags": []},
        {"url": "", "kind": "room", "tags": []},
    ])
    service = MediaService()

    await service.load_catalog()

    assert [a.url for a in service.room_images([], 5)] == ["a.jpg"]
    assert list(service.destination_images([], 5)) == []


@pytest.mark.asyncio
async def test_load_catalog_failure_keeps_previous(mocker):
    mocker.patch("guidebot.services.media_service.db_service.get_media_assets", new_callable=AsyncMock, side_effect=RuntimeError("down"))
    service = MediaService()
    service.set_catalog([MediaAsset(url="keep.jpg", kind="room")])

    await service.load_catalog()

    assert [a.url for a in service.room_images([], 1)] == ["keep.jpg"]


@pytest.mark.asyncio
async def test_recent_testimonials_keep_only_reviews_with_images(mocker):
    mocker.patch("guidebot.services.media_service.db_service.get_recent_testimonials", new_callable=AsyncMock, return_value=[
        {"author_name": "a", "content": "좋아요", "images": "[\"https://cdn/1.jpg\"]", "rating": 9},
        {"author_name": "b", "content": "사진 없음", "images": "not json"},
        {"author_name": "c", "body": "리스트", "images": ["https://cdn/2.jpg"], "rating": 0},
        {"author_name": "d", "images": ["https://cdn/3.jpg"]},
    ])

    reviews = await MediaService().recent_testimonials(2)

    assert [r.author_name for r in reviews] == ["a", "c"]
    assert reviews[0].rating == 5
    assert reviews[0].body == "좋아요"
    assert reviews[1].rating == 5


def test_testimonial_rating_is_clamped():
    assert Testimonial.from_document({"rating": -3}).rating == 1
    assert Testimonial.from_document({"rating": "4"}).rating == 4


@pytest.mark.asyncio
async def test_cache_get_or_set_reads_through():
    cache = CacheService("redis://localhost:6379/15")
    cache.redis = AsyncMock()
    cache.redis.get.return_value = None
    fetch = AsyncMock(return_value={"id": 1})

    assert await cache.get_or_set("flow:1", fetch, ttl=60) == {"id": 1}
    cache.redis.setex.assert_awaited_once_with("flow:1", 60, json.dumps({"id": 1}))


@pytest.mark.asyncio
async def test_cache_hit_skips_fetch():
    cache = CacheService("redis://localhost:6379/15")
    cache.redis = AsyncMock()
    cache.redis.get.return_value = b'{"id": 1}'
    fetch = AsyncMock()

    assert await cache.get_or_set("flow:1", fetch) == {"id": 1}
    fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_cache_outage_falls_back_to_fetch():
    cache = CacheService("redis://localhost:6379/15")
    cache.redis = AsyncMock()
    cache.redis.get.side_effect = ConnectionError("refused")
    cache.redis.setex.side_effect = ConnectionError("refused")

    assert await cache.get_or_set("flow:1", AsyncMock(return_value={"id": 1})) == {"id": 1}


@pytest.mark.asyncio
async def test_cache_does_not_store_misses():
    cache = CacheService("redis://localhost:6379/15")
    cache.redis = AsyncMock()
    cache.redis.get.return_value = None

    assert await cache.get_or_set("flow:404", AsyncMock(return_value=None)) is None
    cache.redis.setex.assert_not_awaited()
