"""Micropost endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from microblog.api.dependencies import MicropostServiceDep
from microblog.auth.dependencies import CurrentUser
from microblog.core.exceptions import ErrorResponse
from microblog.schemas.micropost import MicropostCreateRequest, MicropostResponse


router = APIRouter(prefix="/microposts", tags=["Microposts"])


@router.post(
    "",
    response_model=MicropostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a micropost",
    responses={422: {"model": ErrorResponse, "description": "Blank or too long"}},
)
async def create_micropost(
    body: MicropostCreateRequest,
    user: CurrentUser,
    service: MicropostServiceDep,
) -> MicropostResponse:
    micropost = await service.create(user.id, body.content)
    return MicropostResponse.from_micropost(micropost)


@router.delete(
    "/{micropost_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a micropost",
    description="Only the author may delete a micropost.",
    responses={
        404: {"model": ErrorResponse, "description": "Not found or not yours"}
    },
)
async def delete_micropost(
    micropost_id: int,
    user: CurrentUser,
    service: MicropostServiceDep,
) -> None:
    await service.delete(user.id, micropost_id)
