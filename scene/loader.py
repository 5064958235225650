"""Load scene snapshots from YAML scene descriptions."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from core.logging import logger as LOGGER
from scene.query import (
    MaterialResource,
    MeshData,
    Renderable,
    RendererKind,
    SceneSnapshot,
    TextureResource,
)


class SceneLoadError(ValueError):
    """Raised when a scene description is malformed."""


def load_scene(path: Path | str) -> SceneSnapshot:
    """Read a YAML scene description from disk.

    Args:
        path: Path to the scene file.

    Returns:
        Scene snapshot named after the file stem.
    """

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}
    except OSError as exc:
        raise SceneLoadError(f"Cannot read scene file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SceneLoadError(f"Invalid YAML in scene file {path}: {exc}") from exc
    return scene_from_mapping(data, name=path.stem)


def scene_from_mapping(data: Mapping[str, Any], name: str = "scene") -> SceneSnapshot:
    """Build a scene snapshot from a parsed scene description.

    Renderables reference meshes, materials and textures by name. A reference
    to an unknown name is kept as a missing resource (``None``).
    """

    if not isinstance(data, Mapping):
        raise SceneLoadError(f"Scene '{name}' must be a mapping, got {type(data).__name__}")

    meshes = _index(
        _entries(data, "meshes"),
        lambda entry: MeshData(
            name=entry["name"],
            triangle_index_count=_int(entry, "triangle_index_count"),
        ),
    )
    textures = _index(
        _entries(data, "textures"),
        lambda entry: TextureResource(
            name=entry["name"],
            width=_int(entry, "width"),
            height=_int(entry, "height"),
        ),
    )
    materials = _index(
        _entries(data, "materials"),
        lambda entry: MaterialResource(name=entry["name"]),
    )

    renderables = []
    for entry in _entries(data, "renderables"):
        kind_name = str(entry.get("kind", RendererKind.STATIC.value)).lower()
        try:
            kind = RendererKind(kind_name)
        except ValueError as exc:
            raise SceneLoadError(
                f"Renderable '{entry['name']}' has unknown kind '{kind_name}'"
            ) from exc
        renderables.append(
            Renderable(
                name=entry["name"],
                kind=kind,
                meshes=_resolve(entry, "meshes", meshes),
                materials=_resolve(entry, "materials", materials),
                textures=_resolve(entry, "textures", textures),
                enabled=bool(entry.get("enabled", True)),
            )
        )

    LOGGER.debug(
        "Loaded scene %s: %d renderables, %d meshes, %d textures, %d materials",
        name,
        len(renderables),
        len(meshes),
        len(textures),
        len(materials),
    )
    return SceneSnapshot(
        renderables=renderables,
        textures=list(textures.values()),
        materials=list(materials.values()),
        name=name,
    )


def _entries(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    entries = data.get(key) or []
    if not isinstance(entries, list):
        raise SceneLoadError(f"'{key}' must be a list")
    for entry in entries:
        if not isinstance(entry, Mapping) or not entry.get("name"):
            raise SceneLoadError(f"Every entry in '{key}' needs a name: {entry!r}")
    return entries


def _index(entries: list[Mapping[str, Any]], build) -> dict[str, Any]:
    indexed: dict[str, Any] = {}
    for entry in entries:
        if entry["name"] in indexed:
            raise SceneLoadError(f"Duplicate resource name '{entry['name']}'")
        indexed[entry["name"]] = build(entry)
    return indexed


def _int(entry: Mapping[str, Any], key: str) -> int:
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneLoadError(f"'{entry['name']}': {key} must be an integer, got {value!r}")
    return value


def _resolve(entry: Mapping[str, Any], key: str, known: Mapping[str, Any]) -> tuple:
    names = entry.get(key) or []
    if not isinstance(names, list):
        raise SceneLoadError(f"Renderable '{entry['name']}': '{key}' must be a list")
    resolved = []
    for ref in names:
        resource = known.get(ref)
        if resource is None:
            LOGGER.debug("Renderable %s references missing %s '%s'", entry["name"], key, ref)
        resolved.append(resource)
    return tuple(resolved)
