import logging
from typing import Any, List

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from app.application import directory_service
from app.core.domain.errors import InvalidRoleError
from app.infrastructure.storage import connection as storage
from app.interfaces.api.schemas import LegacySaveResponse

# Legacy endpoints: raw records in, raw records out (password included).
router = APIRouter()
logger = logging.getLogger("users")


@router.post(
    "/api/users",
    response_model=LegacySaveResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": LegacySaveResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": LegacySaveResponse},
    },
)
def save_user(payload: Any = Body(default=None)):
    try:
        directory_service.save_raw_user(
            storage.get_store(), {} if payload is None else payload
        )
    except InvalidRoleError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Invalid role"},
        )
    except Exception:
        logger.exception("Error saving user data")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to save user data"},
        )
    return LegacySaveResponse(success=True)


@router.get("/api/users/{role}", response_model=List[Any])
def list_users(role: str):
    try:
        return directory_service.list_role_users(storage.get_store(), role)
    except InvalidRoleError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid role"}
        )
    except Exception:
        logger.exception("Error fetching users", extra={"role": role})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch users"},
        )
