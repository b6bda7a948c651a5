"""Shared fixtures: a fake Ollama store and LM Studio root under tmp_path."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from ollama_links.types import MEDIA_TYPE_MODEL, MEDIA_TYPE_PROJECTOR

# ---------------------------------------------------------------------------
# Manifest helpers
# ---------------------------------------------------------------------------

CONFIG_MEDIA_TYPE = "application/vnd.docker.container.image.v1+json"
MANIFEST_MEDIA_TYPE = "application/vnd.docker.distribution.manifest.v2+json"


def layer(media_type: str, digest: str, size: int = 1024) -> dict:
    return {"mediaType": media_type, "digest": digest, "size": size}


def model_layer(digest: str) -> dict:
    return layer(MEDIA_TYPE_MODEL, digest)


def projector_layer(digest: str) -> dict:
    return layer(MEDIA_TYPE_PROJECTOR, digest)


class FakeOllamaStore:
    """Builds ``manifests/`` and ``blobs/`` trees like Ollama lays them out."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.manifests = root / "manifests"
        self.blobs = root / "blobs"
        self.manifests.mkdir(parents=True)
        self.blobs.mkdir()

    def add_manifest(self, rel: str, layers: list[dict]) -> Path:
        """Write a manifest at ``manifests/{rel}`` and its referenced blobs."""
        doc = {
            "schemaVersion": 2,
            "mediaType": MANIFEST_MEDIA_TYPE,
            "config": layer(CONFIG_MEDIA_TYPE, "sha256:c0ffee", 485),
            "layers": layers,
        }
        for entry in layers:
            (self.blobs / entry["digest"].replace(":", "-")).write_bytes(b"blob")
        return self.add_raw(rel, json.dumps(doc))

    def add_raw(self, rel: str, content: str) -> Path:
        path = self.manifests / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    def add_model(self, family: str, variant: str, digest: str) -> Path:
        return self.add_manifest(
            f"registry.ollama.ai/library/{family}/{variant}", [model_layer(digest)]
        )


def snapshot(root: Path) -> set[tuple[str, str | None]]:
    """Every entry under *root* with its link target (None for non-links)."""
    entries = set()
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            p = Path(dirpath) / name
            target = os.readlink(p) if p.is_symlink() else None
            entries.add((str(p.relative_to(root)), target))
    return entries


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store(tmp_path: Path) -> FakeOllamaStore:
    return FakeOllamaStore(tmp_path / "ollama")


@pytest.fixture()
def lmstudio_dir(tmp_path: Path) -> Path:
    return tmp_path / "lmstudio"
