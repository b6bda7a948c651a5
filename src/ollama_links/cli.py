"""ollama-links command-line interface."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ollama_links import __version__
from ollama_links.types import DEFAULT_LMSTUDIO_DIR, DEFAULT_OLLAMA_DIR


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="ollama-links",
        description="Symlink Ollama model blobs into an LM Studio models directory.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ollama-links {__version__}",
    )
    parser.add_argument(
        "--ollama-dir",
        type=Path,
        default=DEFAULT_OLLAMA_DIR,
        help=f"Ollama models directory  [default: {DEFAULT_OLLAMA_DIR}]",
    )
    parser.add_argument(
        "--lmstudio-dir",
        type=Path,
        default=DEFAULT_LMSTUDIO_DIR,
        help=f"LM Studio models directory  [default: {DEFAULT_LMSTUDIO_DIR}]",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without creating any symlinks.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print per-file warnings and per-link details.",
    )

    args = parser.parse_args(argv)
    _cmd_link(args)


# ---------------------------------------------------------------------------
# Command implementation
# ---------------------------------------------------------------------------


def _cmd_link(args: argparse.Namespace) -> None:
    """Discover Ollama models and link them into LM Studio."""
    from ollama_links.discovery import DiscoveryError, discover_models
    from ollama_links.materialize import materialize_models

    ollama_dir = args.ollama_dir.expanduser()
    lmstudio_dir = args.lmstudio_dir.expanduser()

    print(f"Scanning Ollama models in: {ollama_dir}")
    print(f"Target LM Studio directory: {lmstudio_dir}")
    if args.dry_run:
        print("DRY RUN MODE - no changes will be made")
    print()

    try:
        models = discover_models(ollama_dir, verbose=args.verbose)
    except DiscoveryError as exc:
        print(f"Error discovering models: {exc}", file=sys.stderr)
        sys.exit(1)

    if not models:
        print("No models found in Ollama directory")
        return

    print(f"Found {len(models)} models:")
    for m in models:
        print(f"  - {m.name}")
    print()

    created, skipped = materialize_models(
        models,
        ollama_dir,
        lmstudio_dir,
        dry_run=args.dry_run,
        verbose=args.verbose,
    )

    print()
    print(f"Summary: {created} created, {skipped} skipped")
    if created and not args.dry_run:
        print("Models are now available in LM Studio under the 'ollama' provider")


if __name__ == "__main__":
    main()
