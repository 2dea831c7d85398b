# app/core/rate_limit.py
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request


def _client_key(request: Request) -> str:
    # slowapi only passes the request to a parameter named `request`
    return get_remote_address(request)


# One shared Limiter for the whole app
limiter = Limiter(key_func=_client_key)
