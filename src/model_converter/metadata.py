# ABOUTME: Metadata derived from the final scene and encoded output
# ABOUTME: Vertex and triangle counts plus the post-transform bounding box

import math
from typing import Optional

import trimesh

from . import scene_engine
from .formats import ModelFormat
from .models import BoundingBox, ModelMetadata


def count_geometry(scene: trimesh.Scene):
    """
    Count vertices and triangles over every mesh instance.

    Triangles are index_count / 3 for indexed meshes and vertex_count / 3
    otherwise; the sum is floored once at the end.

    Returns:
        Tuple of (vertex_count, triangle_count)
    """
    vertices = 0
    triangles = 0.0

    for _, geometry in scene_engine.iter_mesh_instances(scene):
        positions = scene_engine.position_count(geometry)
        indices = scene_engine.index_count(geometry)

        vertices += positions
        if indices is not None:
            triangles += indices / 3
        else:
            triangles += positions / 3

    return vertices, int(math.floor(triangles))


def compute_bounding_box(scene: trimesh.Scene) -> Optional[BoundingBox]:
    """World-space bounds of the scene as it is now, or None if empty."""
    bounds = scene_engine.world_bounds(scene)
    if bounds is None:
        return None

    lo, hi = bounds
    size = hi - lo
    return BoundingBox(
        min=tuple(float(v) for v in lo),
        max=tuple(float(v) for v in hi),
        size=tuple(float(v) for v in size),
    )


def calculate_metadata(scene: trimesh.Scene, format: ModelFormat, byte_size: int) -> ModelMetadata:
    """
    Build the metadata record for a converted model.

    Must be called after every transform has been applied.
    """
    vertex_count, triangle_count = count_geometry(scene)
    return ModelMetadata(
        vertex_count=vertex_count,
        triangle_count=triangle_count,
        byte_size=byte_size,
        format=format,
        bounding_box=compute_bounding_box(scene),
    )
