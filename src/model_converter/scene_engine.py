# ABOUTME: Thin adapter over trimesh acting as the scene graph engine
# ABOUTME: Byte-level load/export plus the scene introspection the pipeline needs

"""
Scene graph engine binding.

Every format-specific parse and encode is delegated to trimesh. The rest of
the pipeline only talks to the functions below, so the scene library stays
swappable and the capability surface stays small:

    load_scene / export_scene          bytes <-> trimesh.Scene
    iter_mesh_instances / iter_meshes  traversal
    world_bounds                       axis-aligned bounds in world space
    position_count / index_count       per-mesh buffer sizes
    get_positions / set_positions      vertex position access
    recompute_normals                  rebuild normals from faces
    resolve_world_transforms           flatten the transform graph
"""

import io
import logging
from typing import Callable, Dict, Iterator, Optional, Tuple

import numpy as np
import trimesh
from trimesh.exchange.gltf import export_glb, export_gltf
from trimesh.exchange.obj import export_obj
from trimesh.exchange.stl import export_stl, export_stl_ascii

logger = logging.getLogger('model_converter')

TreePostprocessor = Callable[[dict], None]


def load_scene(data: bytes, file_type: str) -> trimesh.Scene:
    """
    Parse raw file bytes into a scene.

    Args:
        data: Complete file contents
        file_type: trimesh file type ('glb', 'gltf', 'obj', 'stl', '3mf')

    Returns:
        Loaded scene; single meshes are wrapped in a Scene

    Raises:
        ValueError: If the payload is empty
        Exception: Whatever trimesh raises for malformed content
    """
    if not data:
        raise ValueError("Model payload is empty")

    scene = trimesh.load_scene(io.BytesIO(data), file_type=file_type)
    logger.debug("Parsed %s: %d geometries, %d nodes",
                 file_type, len(scene.geometry), len(scene.graph.nodes_geometry))
    return scene


def export_scene(scene: trimesh.Scene,
                 file_type: str,
                 binary: bool = True,
                 tree_postprocessor: Optional[TreePostprocessor] = None) -> bytes:
    """
    Encode a scene to bytes.

    Args:
        scene: Scene to encode
        file_type: 'stl', 'obj', 'gltf' or 'glb'
        binary: Binary sub-mode where the format has one (STL)
        tree_postprocessor: Called with the glTF document tree before it is
                            serialized (gltf/glb only)

    Returns:
        Encoded file bytes
    """
    if file_type == 'stl':
        mesh = scene.to_mesh()
        if binary:
            return export_stl(mesh)
        return export_stl_ascii(mesh).encode('utf-8')

    if file_type == 'obj':
        text = export_obj(scene, include_texture=False)
        return text.encode('utf-8')

    if file_type == 'glb':
        return export_glb(scene, tree_postprocessor=tree_postprocessor)

    if file_type == 'gltf':
        # one self-contained JSON document with base64 buffers
        files = export_gltf(
            scene,
            merge_buffers=True,
            embed_buffers=True,
            tree_postprocessor=tree_postprocessor,
        )
        return files['model.gltf']

    raise ValueError(f"Scene engine cannot export '{file_type}'")


def is_mesh(geometry) -> bool:
    """True for geometry carrying a vertex position buffer."""
    return isinstance(geometry, (trimesh.Trimesh, trimesh.PointCloud))


def iter_mesh_instances(scene: trimesh.Scene) -> Iterator[Tuple[str, object]]:
    """Yield (node name, geometry) for every mesh instance in the graph."""
    for node_name in scene.graph.nodes_geometry:
        _, geometry_name = scene.graph[node_name]
        geometry = scene.geometry.get(geometry_name)
        if geometry is not None and is_mesh(geometry):
            yield node_name, geometry


def iter_meshes(scene: trimesh.Scene) -> Iterator[object]:
    """Yield each mesh geometry once, even when it is instanced several times."""
    for geometry in scene.geometry.values():
        if is_mesh(geometry):
            yield geometry


def world_bounds(scene: trimesh.Scene) -> Optional[np.ndarray]:
    """Return the (2, 3) [min, max] world bounds, or None for an empty scene."""
    if scene.is_empty:
        return None
    bounds = scene.bounds
    if bounds is None:
        return None
    return np.asarray(bounds, dtype=np.float64)


def position_count(geometry) -> int:
    return len(geometry.vertices)


def index_count(geometry) -> Optional[int]:
    """Number of indices in the triangle index buffer, None for unindexed data."""
    if isinstance(geometry, trimesh.Trimesh):
        return len(geometry.faces) * 3
    return None


def get_positions(geometry) -> np.ndarray:
    return np.array(geometry.vertices, dtype=np.float64)


def set_positions(geometry, positions: np.ndarray) -> None:
    # assignment (not in-place edit) drops every cached derived value
    geometry.vertices = positions


def recompute_normals(geometry) -> Optional[np.ndarray]:
    """Rebuild vertex normals from the current positions and faces."""
    if not isinstance(geometry, trimesh.Trimesh) or len(geometry.faces) == 0:
        return None
    return geometry.vertex_normals


def resolve_world_transforms(scene: trimesh.Scene) -> Dict[str, np.ndarray]:
    """Compute the world matrix of every geometry node so none are pending."""
    return {node_name: scene.graph[node_name][0]
            for node_name in scene.graph.nodes_geometry}


def apply_root_transform(scene: trimesh.Scene, matrix: np.ndarray) -> None:
    """Pre-multiply a matrix onto every child of the root frame."""
    scene.apply_transform(matrix)
