# backend/tests/integration/test_public_api.py
from unittest.mock import AsyncMock

from guidebot.config.settings import settings


def test_root(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"
    assert response.json()["environment"] == "test"


def test_health_and_liveness(test_client):
    assert test_client.get("/health").json()["status"] == "healthy"
    assert test_client.get("/health/live").json() == {"status": "alive"}


def test_readiness_requires_database(test_client, mocker):
    mocker.patch("guidebot.routes.public.db_service.health_check", new_callable=AsyncMock, return_value=False)

    assert test_client.get("/health/ready").status_code == 503


def test_readiness_reports_cache(test_client, mocker):
    mocker.patch("guidebot.routes.public.db_service.health_check", new_callable=AsyncMock, return_value=True)
    mocker.patch("guidebot.routes.public.cache_service.ping", new_callable=AsyncMock, return_value=False)

    response = test_client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "cache": "unavailable"}


def test_metrics_open_without_api_key(test_client, mocker):
    mocker.patch.object(settings, "api_key", None)

    response = test_client.get("/metrics")

    assert response.status_code == 200
    assert "node_resolutions_total" in response.text


def test_metrics_require_api_key_when_configured(test_client, mocker):
    mocker.patch.object(settings, "api_key", "secret")

    assert test_client.get("/metrics").status_code == 403
    assert test_client.get("/metrics", headers={"X-API-KEY": "secret"}).status_code == 200


def test_app_uses_shared_limiter_disabled_under_test(test_client):
    from guidebot.utils.rate_limiter import limiter

    assert test_client.app.state.limiter is limiter
    assert limiter.enabled is False
