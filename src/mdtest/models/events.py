"""Structural events produced by the document scanner."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FenceStart(BaseModel):
    """Opening of a code block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["fence_start"] = "fence_start"
    info: str = Field(default="", description="Info string after the opening delimiter")
    line: int | None = Field(default=None, description="1-based source line of the fence")


class Text(BaseModel):
    """Literal text inside a code block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    chunk: str


class FenceEnd(BaseModel):
    """Close of the current code block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["fence_end"] = "fence_end"


class Other(BaseModel):
    """Any markdown structure that is not code; ignored by the executor."""

    model_config = ConfigDict(frozen=True)

    type: Literal["other"] = "other"
    kind: str = Field(description="Token type reported by the markdown parser")


Event = FenceStart | Text | FenceEnd | Other
