"""Scene query interface consumed by the diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class RendererKind(str, Enum):
    """Kind of renderer holding mesh data."""

    STATIC = "static"
    SKINNED = "skinned"


@dataclass(frozen=True, eq=False)
class MeshData:
    """Shared mesh asset referenced by one or more renderables."""

    name: str
    triangle_index_count: int


@dataclass(frozen=True, eq=False)
class TextureResource:
    """Texture asset with its pixel dimensions."""

    name: str
    width: int
    height: int


@dataclass(frozen=True, eq=False)
class MaterialResource:
    """Material asset."""

    name: str


@dataclass(frozen=True, eq=False)
class Renderable:
    """Renderer instance present in the scene.

    A static renderer may carry several meshes (one per child mesh filter); a
    skinned renderer carries its single shared mesh. ``None`` entries stand for
    missing mesh references.
    """

    name: str
    kind: RendererKind = RendererKind.STATIC
    meshes: tuple[MeshData | None, ...] = ()
    materials: tuple[MaterialResource | None, ...] = ()
    textures: tuple[TextureResource | None, ...] = ()
    enabled: bool = True


class SceneQuery(Protocol):
    """Read access to the live scene state.

    Every call reflects the scene at call time; callers must not cache results
    across runs.
    """

    def iter_renderables(self) -> Iterable[Renderable | None]:
        """Return every renderable in the scene, enabled or not."""

    def iter_textures(self) -> Iterable[TextureResource | None]:
        """Return texture resources loaded in the scene."""

    def iter_materials(self) -> Iterable[MaterialResource | None]:
        """Return material resources loaded in the scene."""


@dataclass
class SceneSnapshot:
    """In-memory scene used by the command line and by tests.

    Resources referenced by renderables are included in the texture and
    material enumerations alongside the standalone resource lists, each
    resource appearing once.
    """

    renderables: list[Renderable | None] = field(default_factory=list)
    textures: list[TextureResource | None] = field(default_factory=list)
    materials: list[MaterialResource | None] = field(default_factory=list)
    name: str = "scene"

    def iter_renderables(self) -> list[Renderable | None]:
        return list(self.renderables)

    def iter_textures(self) -> list[TextureResource | None]:
        referenced = [
            texture
            for renderable in self.renderables
            if renderable is not None
            for texture in renderable.textures
        ]
        return _unique(list(self.textures) + referenced)

    def iter_materials(self) -> list[MaterialResource | None]:
        referenced = [
            material
            for renderable in self.renderables
            if renderable is not None
            for material in renderable.materials
        ]
        return _unique(list(self.materials) + referenced)


def _unique(items: list) -> list:
    """Drop repeated references to the same object, keeping ``None`` entries."""

    seen: set[int] = set()
    unique = []
    for item in items:
        if item is not None:
            if id(item) in seen:
                continue
            seen.add(id(item))
        unique.append(item)
    return unique
