"""Scene access for budget diagnostics."""

from scene.loader import SceneLoadError, load_scene, scene_from_mapping
from scene.query import (
    MaterialResource,
    MeshData,
    Renderable,
    RendererKind,
    SceneQuery,
    SceneSnapshot,
    TextureResource,
)

__all__ = [
    "MaterialResource",
    "MeshData",
    "Renderable",
    "RendererKind",
    "SceneLoadError",
    "SceneQuery",
    "SceneSnapshot",
    "TextureResource",
    "load_scene",
    "scene_from_mapping",
]
