from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from user_api.deps import get_user_service
from user_api.errors import InvalidArgumentError
from user_api.schemas import CreateUserRequest, UpdateUserRequest, UserResponse
from user_api.user_service import UserService

logger = logging.getLogger("user_api.api")

router = APIRouter(prefix="/users", tags=["users"])


def _ensure_valid_id(user_id: int) -> None:
    if user_id <= 0:
        logger.warning("Invalid user ID provided: %s", user_id)
        raise HTTPException(status_code=400, detail="Invalid user ID")


def _not_found(user_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"User with ID {user_id} not found")


@router.get("", response_model=list[UserResponse])
def list_users(service: UserService = Depends(get_user_service)):
    logger.info("Getting all users")
    return [UserResponse.model_validate(u) for u in service.get_all_users()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    _ensure_valid_id(user_id)

    user = service.get_user_by_id(user_id)
    if user is None:
        logger.warning("User not found with ID: %s", user_id)
        raise _not_found(user_id)
    return UserResponse.model_validate(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    request: Request,
    response: Response,
    payload: CreateUserRequest = Body(...),
    service: UserService = Depends(get_user_service),
):
    try:
        user = service.create_user(payload.name, payload.email)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except Exception:
        logger.exception("Error creating user")
        raise HTTPException(status_code=500, detail="An error occurred while creating the user")

    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    logger.info("User created successfully with ID: %s", user.id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UpdateUserRequest = Body(...),
    service: UserService = Depends(get_user_service),
):
    _ensure_valid_id(user_id)

    try:
        user = service.update_user(user_id, payload.name, payload.email)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except Exception:
        logger.exception("Error updating user with ID: %s", user_id)
        raise HTTPException(status_code=500, detail="An error occurred while updating the user")

    if user is None:
        logger.warning("User not found for update with ID: %s", user_id)
        raise _not_found(user_id)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> Response:
    _ensure_valid_id(user_id)

    if not service.delete_user(user_id):
        logger.warning("User not found for deletion with ID: %s", user_id)
        raise _not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
