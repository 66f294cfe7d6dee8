"""Domain types for packaging runs."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

ARCHIVE_SUFFIX = ".zip"


class PackagingMode(str, Enum):
    """How artifacts map to functions for one run."""

    INDIVIDUAL = "individual"
    UNIFIED = "unified"

    @classmethod
    def from_flag(cls, individually: bool) -> PackagingMode:
        return cls.INDIVIDUAL if individually else cls.UNIFIED


class CompileResult(BaseModel):
    """One compiled packaging unit produced by the bundler."""

    model_config = ConfigDict(frozen=True)

    output_path: Path = Field(..., description="Directory holding compiled output")
    function_name: str | None = Field(
        default=None,
        description="Owning function; None when the unit is the whole service",
    )

    @property
    def is_service(self) -> bool:
        return self.function_name is None


def archive_name(identity: str) -> str:
    """Return the artifact file name for ``identity``."""
    return f"{identity}{ARCHIVE_SUFFIX}"
