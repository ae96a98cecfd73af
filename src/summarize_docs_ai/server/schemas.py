"""Request and response bodies for the HTTP API (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ApiSettingsIn(_CamelModel):
    provider: str | None = None
    api_key: str | None = Field(default=None, alias="apiKey")


class SummarizeIn(_CamelModel):
    text: str = ""
    mode: str | None = None
    length: float = 0.5
    custom_instructions: str | None = Field(default=None, alias="customInstructions")
    quick_action: str | None = Field(default=None, alias="quickAction")
    api_settings: ApiSettingsIn | None = Field(default=None, alias="apiSettings")


class SummarizeOut(BaseModel):
    summary: str


class GrammarCheckIn(_CamelModel):
    text: str = ""
    api_key: str | None = Field(default=None, alias="apiKey")
    provider: str | None = None


class GrammarCheckOut(BaseModel):
    result: str


class ExtractTextOut(BaseModel):
    text: str


class ProviderInfo(BaseModel):
    id: str
    model: str
    endpoint: str


class ErrorOut(BaseModel):
    error: str
