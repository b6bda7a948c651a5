"""Shared data models: manifest schema, discovered models, link outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# ---------------------------------------------------------------------------
# Default constants
# ---------------------------------------------------------------------------

DEFAULT_OLLAMA_DIR = Path.home() / ".ollama" / "models"
DEFAULT_LMSTUDIO_DIR = Path.home() / ".cache" / "lm-studio" / "models"

PROVIDER_NAME = "ollama"
MANIFESTS_SUBDIR = "manifests"
BLOBS_SUBDIR = "blobs"

MEDIA_TYPE_MODEL = "application/vnd.ollama.image.model"
MEDIA_TYPE_PROJECTOR = "application/vnd.ollama.image.projector"

# ---------------------------------------------------------------------------
# Manifest schema (read-only, as written by Ollama)
# ---------------------------------------------------------------------------


class _ManifestModel(BaseModel):
    """Base for manifest documents: JSON ``null`` reads as the field default."""

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )
        return value


class BlobRef(_ManifestModel):
    """A config or layer entry pointing at a content-addressed blob."""

    media_type: str = Field(default="", alias="mediaType")
    digest: str = ""
    size: int = 0


class Manifest(_ManifestModel):
    """One model variant's manifest: a config blob plus ordered layers."""

    schema_version: int = Field(default=0, alias="schemaVersion")
    media_type: str = Field(default="", alias="mediaType")
    config: BlobRef = Field(default_factory=BlobRef)
    layers: list[BlobRef] = Field(default_factory=list)

    @field_validator("layers", mode="before")
    @classmethod
    def _null_layers_as_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [{} if entry is None else entry for entry in value]
        return value


# ---------------------------------------------------------------------------
# Discovery result
# ---------------------------------------------------------------------------


@dataclass
class ModelInfo:
    """A discovered model variant ready to be linked."""

    name: str  # "{family}-{variant}"
    main_model_blob: str = ""  # Digest of the primary weights layer
    additional_blobs: dict[str, str] = field(default_factory=dict)  # Digest -> filename


# ---------------------------------------------------------------------------
# Link outcome
# ---------------------------------------------------------------------------

LinkStatus = Literal["created", "would_create", "skipped", "error"]


@dataclass
class LinkResult:
    """Outcome of materializing one model."""

    name: str
    status: LinkStatus
    reason: str | None = None
    links: list[tuple[Path, Path]] = field(default_factory=list)  # (link, source)
    warnings: list[str] = field(default_factory=list)

    @property
    def created(self) -> bool:
        """True when the primary link was (or in dry-run would be) created."""
        return self.status in ("created", "would_create")
