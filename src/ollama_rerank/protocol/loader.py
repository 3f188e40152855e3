"""
Variant loader for reading node variant manifests.

Supports:
- Built-in manifests shipped with the package
- An explicit directory of additional manifests
- Environment variable configuration
- Caching for performance
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ollama_rerank.errors import ManifestError
from ollama_rerank.protocol.manifest import VariantManifest

BUILTIN_VARIANTS_DIR = Path(__file__).resolve().parent.parent / "variants"

DEFAULT_VARIANT = "ollama-chat"

_MANIFEST_SUFFIXES = (".yaml", ".yml", ".json")


class VariantLoader:
    """Loads variant manifests from the filesystem.

    The loader searches for manifests in the following order:
    1. Explicit base_path if provided
    2. OLLAMA_RERANK_VARIANTS_DIR environment variable
    3. Manifests bundled with the package

    Example:
        >>> loader = VariantLoader()
        >>> manifest = loader.load("ollama-generate")
        >>> print(manifest.rerank.path)
        /api/generate
    """

    def __init__(
        self,
        base_path: str | Path | None = None,
        cache_enabled: bool = True,
    ) -> None:
        """Initialize the variant loader.

        Args:
            base_path: Extra directory searched before the built-in manifests
            cache_enabled: Enable caching of loaded manifests
        """
        self._base_path = Path(base_path) if base_path else None
        self._cache_enabled = cache_enabled
        self._cache: dict[str, VariantManifest] = {}

    def search_paths(self) -> list[Path]:
        """Directories searched for manifests, highest priority first."""
        paths: list[Path] = []
        if self._base_path and self._base_path.is_dir():
            paths.append(self._base_path)
        env_path = os.getenv("OLLAMA_RERANK_VARIANTS_DIR")
        if env_path and Path(env_path).is_dir():
            paths.append(Path(env_path))
        paths.append(BUILTIN_VARIANTS_DIR)
        return paths

    def _find_manifest(self, variant_id: str) -> Path | None:
        for directory in self.search_paths():
            for suffix in _MANIFEST_SUFFIXES:
                candidate = directory / f"{variant_id}{suffix}"
                if candidate.is_file():
                    return candidate
        return None

    def available(self) -> list[str]:
        """List the ids of every manifest that can be loaded."""
        ids: set[str] = set()
        for directory in self.search_paths():
            for path in directory.iterdir():
                if path.suffix in _MANIFEST_SUFFIXES:
                    ids.add(path.stem)
        return sorted(ids)

    def load(self, variant_id: str = DEFAULT_VARIANT) -> VariantManifest:
        """Load a variant manifest by id.

        Args:
            variant_id: Variant identifier (e.g., "ollama-chat")

        Returns:
            Validated VariantManifest

        Raises:
            ManifestError: If the manifest is not found or invalid
        """
        if self._cache_enabled and variant_id in self._cache:
            return self._cache[variant_id]

        path = self._find_manifest(variant_id)
        if path is None:
            raise ManifestError(
                f"Variant '{variant_id}' not found",
                variant=variant_id,
            ).with_hint("available variants: " + ", ".join(self.available()))

        manifest = self.load_file(path)
        if manifest.id != variant_id:
            raise ManifestError(
                f"Manifest id '{manifest.id}' does not match file name '{variant_id}'",
                manifest_path=str(path),
                variant=variant_id,
            )

        if self._cache_enabled:
            self._cache[variant_id] = manifest
        return manifest

    def load_file(self, path: str | Path) -> VariantManifest:
        """Load and validate a manifest file."""
        path = Path(path)
        try:
            data = _read_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ManifestError(
                f"Failed to read variant manifest: {e}",
                manifest_path=str(path),
            ) from e

        try:
            return VariantManifest.model_validate(data)
        except ValidationError as e:
            raise ManifestError(
                f"Invalid variant manifest: {e}",
                manifest_path=str(path),
            ) from e

    def clear_cache(self) -> None:
        """Clear the manifest cache."""
        self._cache.clear()


def _read_file(path: Path) -> Any:
    content = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(content)
    return yaml.safe_load(content)
