# /guidebot/utils/rate_limiter.py

from slowapi import Limiter
from guidebot.utils.request_utils import get_remote_address
from guidebot.config.settings import settings

# Shared limiter instance, attached to the app in main.py.

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_per_minute}/minute"],
    enabled=settings.environment != "test",
)
