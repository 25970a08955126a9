"""Request dependencies shared by the API routes."""

from fastapi import HTTPException, Request, status

from studydebt.config.app_config import load_app_config


def get_current_user_id(request: Request) -> str:
    """Resolve the current user from the identity header.

    The header is set by the authentication proxy in front of the API;
    its name comes from ``api.user_header`` in the app config.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    header = load_app_config().api.user_header
    user_id = (request.headers.get(header) or "").strip()

    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    return user_id
