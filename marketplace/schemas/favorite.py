"""Favorite Schemas - folder creation, filing an item, folder listing."""

from pydantic import BaseModel, Field

from marketplace.core.domain_types import MAX_ID, FolderSnapshot


class AddFolderRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class FolderResponse(BaseModel):
    id: int
    user_id: int
    name: str

    @classmethod
    def from_snapshot(cls, f: FolderSnapshot) -> "FolderResponse":
        return cls(id=f.id, user_id=f.user_id, name=f.name)


class AddFavoriteRequest(BaseModel):
    item_id: int = Field(ge=1, le=MAX_ID)
    folder_id: int = Field(ge=1, le=MAX_ID)
