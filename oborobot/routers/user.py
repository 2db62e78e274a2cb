# oborobot/routers/user.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from oborobot import config
from oborobot.db.repo import MetadataStore, QueryLogStore, get_session

router = APIRouter(prefix="/api/user", tags=["user"])


class UserQueryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    href: str = ""
    search_value: str = Field("", alias="searchValue")
    is_checked: bool = Field(False, alias="isChecked")


class UserFavoriteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    href: str = Field(..., min_length=1)
    is_checked: bool = Field(False, alias="isChecked")


class VersionResponse(BaseModel):
    version: str


@router.post("/query", response_model=List[VersionResponse])
def post_user_query(req: UserQueryRequest, session: Session = Depends(get_session)) -> List[VersionResponse]:
    """Log a search the user ran in the browser."""
    version = config.api_version()
    QueryLogStore(session).add(req.href, req.search_value, req.is_checked, version)
    return [VersionResponse(version=version)]


@router.post("/favorite", response_model=List[VersionResponse])
def post_user_favorite(req: UserFavoriteRequest, session: Session = Depends(get_session)) -> List[VersionResponse]:
    """Record a page the user marked; titles/descriptions are filled in out of band."""
    version = config.api_version()
    MetadataStore(session).add(req.href, req.is_checked, version)
    return [VersionResponse(version=version)]
