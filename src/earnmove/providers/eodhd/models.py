"""Pydantic models for EODHD API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExchangeSymbol(BaseModel):
    """One row of /exchange-symbol-list/{exchange}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: str = Field(alias="Code")
    name: str | None = Field(default=None, alias="Name")
    exchange: str | None = Field(default=None, alias="Exchange")
    type: str | None = Field(default=None, alias="Type")
