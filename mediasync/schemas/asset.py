"""Schemas for album listings and asset upload responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Album(BaseModel):
    """Album entry from the album listing endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    album_name: str = Field(alias="albumName")


class AssetResponse(BaseModel):
    """Body returned by the asset upload endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: str


class AlbumAssetsRequest(BaseModel):
    """Body for adding assets to an album."""

    ids: list[str]
