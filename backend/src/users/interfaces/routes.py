from fastapi import APIRouter, Depends, Query

from shared.dependencies import get_user_service
from users.application.dto import CreateUserRequest, UpdateUserRequest
from users.application.services import UserService
from users.interfaces.schemas import CreateUserBody, UpdateUserBody, UserResponseSchema

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponseSchema, status_code=201)
async def create(body: CreateUserBody, service: UserService = Depends(get_user_service)):
    return await service.create_user(
        CreateUserRequest(username=body.username, email=body.email, password=body.password)
    )


@router.get("", response_model=list[UserResponseSchema])
async def list_all(service: UserService = Depends(get_user_service)):
    return await service.list_all()


@router.get("/active", response_model=list[UserResponseSchema])
async def list_active(service: UserService = Depends(get_user_service)):
    return await service.list_active()


@router.get("/search", response_model=list[UserResponseSchema])
async def search(
    username: str = Query(...),
    service: UserService = Depends(get_user_service),
):
    return await service.search_by_username(username)


@router.get("/username/{username}", response_model=UserResponseSchema)
async def get_by_username(username: str, service: UserService = Depends(get_user_service)):
    return await service.get_by_username(username)


@router.get("/exists/username/{username}", response_model=bool)
async def username_exists(username: str, service: UserService = Depends(get_user_service)):
    return await service.exists_by_username(username)


@router.get("/exists/email/{email}", response_model=bool)
async def email_exists(email: str, service: UserService = Depends(get_user_service)):
    return await service.exists_by_email(email)


@router.get("/domain/{domain}", response_model=list[UserResponseSchema])
async def list_by_email_domain(domain: str, service: UserService = Depends(get_user_service)):
    return await service.list_by_email_domain(domain)


@router.get("/{user_id}", response_model=UserResponseSchema)
async def get_one(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_by_id(user_id)


@router.put("/{user_id}", response_model=UserResponseSchema)
async def update(
    user_id: int,
    body: UpdateUserBody,
    service: UserService = Depends(get_user_service),
):
    return await service.update_user(
        user_id,
        UpdateUserRequest(username=body.username, email=body.email, password=body.password),
    )


@router.patch("/{user_id}/deactivate", status_code=204)
async def deactivate(user_id: int, service: UserService = Depends(get_user_service)):
    await service.deactivate_user(user_id)


@router.delete("/{user_id}", status_code=204)
async def delete(user_id: int, service: UserService = Depends(get_user_service)):
    await service.delete_user(user_id)
