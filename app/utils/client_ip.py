"""
Client address of a request, honoring reverse proxy headers.
"""
from typing import Optional

from fastapi import Request


def get_client_ip(request: Request) -> Optional[str]:
    """
    Client IP for logging.

    Checked in order:
    1. X-Forwarded-For (first address of "client, proxy1, proxy2")
    2. X-Real-IP
    3. request.client.host
    """
    x_forwarded_for = request.headers.get("X-Forwarded-For")
    if x_forwarded_for:
        client_ip = x_forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    x_real_ip = request.headers.get("X-Real-IP")
    if x_real_ip:
        return x_real_ip.strip()

    if request.client:
        return request.client.host

    return None
