from fastapi import Request, Response

from ..config import settings

COOKIE_NAME = "app_session_id"


def is_secure_request(request: Request) -> bool:
    if request.url.scheme == "https":
        return True
    # dietro proxy (Render, Cloudflare...): x-forwarded-proto può essere una lista
    forwarded = request.headers.get("x-forwarded-proto", "")
    return any(p.strip().lower() == "https" for p in forwarded.split(","))


def session_cookie_options(request: Request) -> dict:
    return {
        "httponly": True,
        "path": "/",
        "samesite": "none",
        "secure": is_secure_request(request),
    }


def set_session_cookie(response: Response, request: Request, token: str) -> None:
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=settings.SESSION_EXPIRES_DAYS * 24 * 3600,
        **session_cookie_options(request),
    )


def clear_session_cookie(response: Response, request: Request) -> None:
    response.delete_cookie(COOKIE_NAME, **session_cookie_options(request))
