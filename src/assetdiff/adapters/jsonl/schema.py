"""Pydantic models describing line-delimited inventory records."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime  # noqa: TC003
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from assetdiff.domain.model import DiffStatus


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _key_token(key: str) -> str:
    return key.replace("_", "").casefold()


class InventoryBaseModel(BaseModel):
    """Records use camelCase keys on the wire; reads accept any key casing."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        mapping_value = cast(Mapping[object, object], value)
        aliases = {
            _key_token(field.alias or name): field.alias or name
            for name, field in cls.model_fields.items()
        }
        data: dict[object, object] = {}
        for key, item in mapping_value.items():
            canonical = aliases.get(_key_token(key), key) if isinstance(key, str) else key
            data[canonical] = item
        return data


class RemoteAssetRecord(InventoryBaseModel):
    source_name: str | None = None
    source_asset_id: str = Field(min_length=1)
    filename: str = Field(min_length=1)
    size_bytes: int = Field(ge=0)
    created_utc: datetime | None = None
    media_type: str | None = None

    _normalize_optional = field_validator("source_name", "media_type", mode="before")(
        _blank_to_none
    )

    @field_validator("source_asset_id", "filename")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class DiffResultRecord(InventoryBaseModel):
    source_name: str = Field(min_length=1)
    source_asset_id: str = Field(min_length=1)
    status: DiffStatus
    reason: str
    matched_local_path: str | None = None
