"""Create the LM Studio symlink tree for discovered models."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ollama_links._console import warn
from ollama_links.types import BLOBS_SUBDIR, PROVIDER_NAME, LinkResult, ModelInfo


def blob_path(ollama_dir: str | Path, digest: str) -> Path:
    """Map ``"sha256:abcd"`` to ``{ollama_dir}/blobs/sha256-abcd``."""
    return Path(ollama_dir) / BLOBS_SUBDIR / digest.replace(":", "-", 1)


def provider_dir(lmstudio_dir: str | Path) -> Path:
    """Return the ``ollama`` provider directory under the LM Studio root."""
    return Path(lmstudio_dir) / PROVIDER_NAME


def process_model(
    model: ModelInfo,
    ollama_dir: str | Path,
    provider_root: str | Path,
    *,
    dry_run: bool = False,
    verbose: bool = False,
) -> LinkResult:
    """Link one model's blobs into ``{provider_root}/{name}/``.

    An existing entry at the primary link path (a dangling symlink
    included) means the model is already linked: nothing is touched, not
    even the auxiliary links.  Existing paths are never overwritten.

    With *dry_run* set, the planned links are printed and recorded on the
    result but the filesystem is left alone.
    """
    model_dir = Path(provider_root) / model.name
    main_link = model_dir / f"{model.name}.gguf"

    if os.path.lexists(main_link):
        print(f"SKIPPED: {model.name} (already exists)")
        return LinkResult(model.name, "skipped", reason="already exists")

    print(f"CREATING: {model.name}")

    main_source = blob_path(ollama_dir, model.main_model_blob)
    aux = [
        (model_dir / filename, blob_path(ollama_dir, digest))
        for digest, filename in model.additional_blobs.items()
    ]

    if dry_run:
        result = LinkResult(model.name, "would_create")
        for link, source in [(main_link, main_source), *aux]:
            print(f"  Would create: {link} -> {source}")
            result.links.append((link, source))
        return result

    try:
        model_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        reason = f"Could not create directory for {model.name}: {exc}"
        print(f"ERROR: {reason}")
        return LinkResult(model.name, "error", reason=reason)

    try:
        main_link.symlink_to(main_source)
    except OSError as exc:
        reason = f"Could not create symlink for {model.name}: {exc}"
        print(f"ERROR: {reason}")
        return LinkResult(model.name, "error", reason=reason)

    result = LinkResult(model.name, "created", links=[(main_link, main_source)])
    if verbose:
        print(f"  Main model: {main_link} -> {main_source}")

    # Auxiliary components (e.g. a llava projector) never undo the main link.
    for link, source in aux:
        if os.path.lexists(link):
            if verbose:
                print(f"  Additional component {link.name} already exists")
            continue
        try:
            link.symlink_to(source)
        except OSError as exc:
            warning = f"Could not create additional symlink {link.name}: {exc}"
            warn(warning)
            result.warnings.append(warning)
            continue
        result.links.append((link, source))
        if verbose:
            print(f"  Additional: {link} -> {source}")

    return result


def materialize_models(
    models: Iterable[ModelInfo],
    ollama_dir: str | Path,
    lmstudio_dir: str | Path,
    *,
    dry_run: bool = False,
    verbose: bool = False,
) -> tuple[int, int]:
    """Process every model and return ``(created, skipped)`` counts.

    Models that fail with an error are counted as skipped.
    """
    root = provider_dir(lmstudio_dir)
    created = skipped = 0
    for model in models:
        result = process_model(model, ollama_dir, root, dry_run=dry_run, verbose=verbose)
        if result.created:
            created += 1
        else:
            skipped += 1
    return created, skipped
