"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    image: str = Field(..., description="Base64 image bytes or a data: URL (PNG, JPEG, GIF, BMP, SVG)")
    name: str | None = Field(default=None, description="Original file name, used to recognise SVG")


class EvaluateRequest(BaseModel):
    names: list[str] = Field(
        default_factory=list,
        description="Gallery images to evaluate; empty means all",
    )
