# ABOUTME: Geometric transformations applied between load and export
# ABOUTME: Uniform scale, Y/Z axis swap and re-centering, in that fixed order

import logging

import numpy as np
import trimesh

from . import scene_engine


def apply_transformations(scene: trimesh.Scene,
                          scale: float = 1.0,
                          center: bool = False,
                          flip_yz: bool = False) -> trimesh.Scene:
    """
    Apply the requested transformations to a scene in place.

    Order matters and is fixed:
        1. scale the root frame
        2. swap Y and Z of every vertex and rebuild normals
        3. translate the root so the bounding box center sits at the origin
        4. re-resolve world transforms

    Args:
        scene: Loaded scene
        scale: Uniform scale factor
        center: Move the bounding box center to the origin
        flip_yz: Swap Y and Z coordinates (Y-up <-> Z-up)

    Returns:
        The same scene, for chaining
    """
    logger = logging.getLogger('model_converter')

    if scale is not None and scale != 1.0:
        scale_uniform(scene, scale)
        logger.debug("Scaled scene by %s", scale)

    if flip_yz:
        flipped = swap_yz(scene)
        logger.debug("Swapped Y/Z on %d meshes", flipped)

    if center:
        offset = center_scene(scene)
        logger.debug("Centered scene, offset %s", offset)

    scene_engine.resolve_world_transforms(scene)
    return scene


def scale_uniform(scene: trimesh.Scene, factor: float) -> None:
    """Multiply the scale of the root frame by a uniform factor."""
    scene_engine.apply_root_transform(scene, trimesh.transformations.scale_matrix(factor))


def swap_yz(scene: trimesh.Scene) -> int:
    """
    Swap Y and Z of every vertex position, then rebuild normals.

    Each geometry is visited once, so instanced meshes are not swapped twice.

    Returns:
        Number of meshes modified
    """
    count = 0
    for geometry in scene_engine.iter_meshes(scene):
        positions = scene_engine.get_positions(geometry)
        if len(positions) == 0:
            continue
        scene_engine.set_positions(geometry, positions[:, [0, 2, 1]])
        # normals from the source no longer match the permuted axes
        scene_engine.recompute_normals(geometry)
        count += 1
    return count


def center_scene(scene: trimesh.Scene) -> np.ndarray:
    """
    Translate the root so the world bounding box is centered on the origin.

    Returns:
        The translation that was applied (zeros for an empty scene)
    """
    bounds = scene_engine.world_bounds(scene)
    if bounds is None:
        return np.zeros(3)

    offset = -bounds.mean(axis=0)
    scene_engine.apply_root_transform(scene, trimesh.transformations.translation_matrix(offset))
    return offset
