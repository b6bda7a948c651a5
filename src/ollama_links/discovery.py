"""Walk an Ollama manifest tree and collect linkable models."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import ValidationError

from ollama_links._console import warn
from ollama_links.types import (
    MANIFESTS_SUBDIR,
    MEDIA_TYPE_MODEL,
    MEDIA_TYPE_PROJECTOR,
    Manifest,
    ModelInfo,
)

# Manifests live at .../manifests/{registry}/{namespace}/{model}/{variant}.
_MIN_PATH_PARTS = 3


class DiscoveryError(RuntimeError):
    """The manifest root itself cannot be walked."""


def discover_models(
    ollama_dir: str | Path,
    *,
    verbose: bool = False,
    models: list[ModelInfo] | None = None,
) -> list[ModelInfo]:
    """Return every linkable model found under ``{ollama_dir}/manifests``.

    Models are appended to *models* (a fresh list when omitted) in walk
    order.  Directory entries are sorted, so the order is stable for a
    given tree.  Unreadable, unparsable or incomplete manifests are skipped;
    only a manifest root that cannot be listed raises ``DiscoveryError``.
    """
    if models is None:
        models = []

    root = Path(ollama_dir) / MANIFESTS_SUBDIR
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        msg = f"Cannot read manifest directory {str(root)!r}: {exc.strerror or exc}"
        raise DiscoveryError(msg) from exc

    def _on_walk_error(err: OSError) -> None:
        if verbose:
            warn(f"Could not read directory {err.filename}: {err.strerror}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames.sort()
        for fname in sorted(filenames):
            if fname.startswith("."):
                continue
            info = _model_from_file(Path(dirpath) / fname, root, verbose=verbose)
            if info is not None:
                models.append(info)

    return models


def parse_manifest(path: Path) -> Manifest:
    """Read and validate a single manifest file.

    Raises ``OSError`` if the file cannot be read and
    ``pydantic.ValidationError`` if it is not a valid manifest document.
    """
    return Manifest.model_validate_json(path.read_bytes())


def model_name_for(parts: tuple[str, ...] | list[str]) -> str | None:
    """Build ``"{family}-{variant}"`` from a manifest's relative path parts."""
    if len(parts) < _MIN_PATH_PARTS:
        return None
    return f"{parts[-2]}-{parts[-1]}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _model_from_file(path: Path, root: Path, *, verbose: bool) -> ModelInfo | None:
    try:
        manifest = parse_manifest(path)
    except OSError as exc:
        if verbose:
            warn(f"Could not read manifest {path}: {exc}")
        return None
    except ValidationError as exc:
        if verbose:
            warn(f"Could not parse manifest {path}: {exc.error_count()} error(s)")
        return None

    name = model_name_for(path.relative_to(root).parts)
    if name is None:
        if verbose:
            warn(f"Unexpected manifest path format: {path}")
        return None

    info = ModelInfo(name=name)
    for layer in manifest.layers:
        if layer.media_type == MEDIA_TYPE_MODEL:
            # Last one wins if a manifest lists several.
            info.main_model_blob = layer.digest
        elif layer.media_type == MEDIA_TYPE_PROJECTOR:
            info.additional_blobs[layer.digest] = f"{name}-projector.bin"

    if not info.main_model_blob:
        if verbose:
            warn(f"No main model blob found for {name}")
        return None

    return info
