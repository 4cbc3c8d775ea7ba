import logging
from typing import Optional

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from app.application import directory_service
from app.core.domain.errors import AuthError, ConflictError, ValidationError
from app.infrastructure.storage import connection as storage
from app.interfaces.api.schemas import (
    AuthResponse,
    MessageResponse,
    UserCreate,
    UserLogin,
)

router = APIRouter()
logger = logging.getLogger("auth")

REGISTER_ERRORS = {
    code: {"model": MessageResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_409_CONFLICT,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}
LOGIN_ERRORS = {
    code: {"model": MessageResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.post(
    "/api/auth/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses=REGISTER_ERRORS,
)
def register(payload: Optional[UserCreate] = Body(default=None)):
    payload = payload or UserCreate()
    try:
        result = directory_service.register_user(
            storage.get_store(),
            full_name=payload.full_name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            phone=payload.phone,
        )
    except ValidationError as exc:
        return _message(status.HTTP_400_BAD_REQUEST, str(exc))
    except ConflictError as exc:
        return _message(status.HTTP_409_CONFLICT, str(exc))
    except Exception:
        logger.exception("Registration failed", extra={"email": payload.email})
        return _message(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to register user"
        )

    return AuthResponse(user=result.user, token=result.token.value)


@router.post(
    "/api/auth/login", response_model=AuthResponse, responses=LOGIN_ERRORS
)
def login(payload: Optional[UserLogin] = Body(default=None)):
    payload = payload or UserLogin()
    try:
        result = directory_service.authenticate_user(
            storage.get_store(), email=payload.email, password=payload.password
        )
    except ValidationError as exc:
        return _message(status.HTTP_400_BAD_REQUEST, str(exc))
    except AuthError as exc:
        return _message(status.HTTP_401_UNAUTHORIZED, str(exc))
    except Exception:
        logger.exception("Login failed", extra={"email": payload.email})
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to login")

    return AuthResponse(user=result.user, token=result.token.value)
