# /guidebot/utils/request_utils.py
from fastapi import Request

def get_remote_address(request: Request) -> str:
    """
    Client IP for rate limiting. Honours the first X-Forwarded-For hop when the
    service sits behind a proxy.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "127.0.0.1"
