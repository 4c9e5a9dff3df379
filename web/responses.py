"""Response helpers shared by the routers and exception handlers"""

from fastapi import Response, status
from fastapi.responses import JSONResponse

from teamcal.utils.config import Settings


def failure(message: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Validation failures are ordinary 200 responses carrying success=false."""
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def set_session_cookie(response: Response, settings: Settings, username: str) -> None:
    """The cookie value is the username itself."""
    response.set_cookie(
        key=settings.session.cookie_name,
        value=username,
        max_age=settings.session.max_age_seconds,
        httponly=True,
        secure=settings.app.is_production,
        samesite=settings.session.samesite,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session.cookie_name,
        httponly=True,
        secure=settings.app.is_production,
        samesite=settings.session.samesite,
    )
