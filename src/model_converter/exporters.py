# ABOUTME: Exporter dispatch and attribution stamping for encoded output
# ABOUTME: Each format gets a stamping strategy that keeps its framing intact

import asyncio
from typing import Callable, Dict, Optional

import trimesh

from . import scene_engine
from .errors import UnsupportedFormatError
from .formats import ModelFormat
from .config import (
    ATTRIBUTION_GENERATOR,
    ATTRIBUTION_TEXT,
    ATTRIBUTION_URL,
    ConversionOptions,
)

STL_HEADER_SIZE = 80
STL_ASCII_KEYWORD = b'solid'
STL_ASCII_ATTRIBUTION_LINE = f'solid {ATTRIBUTION_TEXT}'.encode('ascii')
OBJ_ATTRIBUTION_HEADER = f'# {ATTRIBUTION_TEXT}\n# {ATTRIBUTION_URL}\n\n'.encode('ascii')


def stamp_stl_binary(data: bytes) -> bytes:
    """
    Write the attribution into the 80-byte binary STL header.

    Only the leading bytes covered by the text are overwritten; the facet
    count and everything after it keep their positions.
    """
    text = ATTRIBUTION_TEXT.encode('ascii')[:STL_HEADER_SIZE]
    if len(data) < STL_HEADER_SIZE:
        return data
    stamped = bytearray(data)
    stamped[:len(text)] = text
    return bytes(stamped)


def stamp_stl_ascii(data: bytes) -> bytes:
    """Replace a leading 'solid <name>' line; other content is left alone."""
    first, sep, rest = data.partition(b'\n')
    if not first.startswith(STL_ASCII_KEYWORD):
        return data
    return STL_ASCII_ATTRIBUTION_LINE + sep + rest


def stamp_obj(data: bytes) -> bytes:
    """Prepend two comment lines and a blank line."""
    return OBJ_ATTRIBUTION_HEADER + data


def stamp_gltf_tree(tree: dict) -> None:
    """Add generator and copyright to the glTF asset object, creating it if needed."""
    asset = tree.get('asset')
    if not isinstance(asset, dict):
        asset = {'version': '2.0'}
        tree['asset'] = asset
    asset['generator'] = ATTRIBUTION_GENERATOR
    asset['copyright'] = ATTRIBUTION_TEXT


def _export_stl(scene: trimesh.Scene, options: ConversionOptions) -> bytes:
    data = scene_engine.export_scene(scene, 'stl', binary=options.binary)
    if not options.add_attribution:
        return data
    if options.binary:
        return stamp_stl_binary(data)
    return stamp_stl_ascii(data)


def _export_obj(scene: trimesh.Scene, options: ConversionOptions) -> bytes:
    data = scene_engine.export_scene(scene, 'obj')
    if options.add_attribution:
        data = stamp_obj(data)
    return data


def _gltf_postprocessor(options: ConversionOptions) -> Optional[Callable[[dict], None]]:
    return stamp_gltf_tree if options.add_attribution else None


def _export_gltf(scene: trimesh.Scene, options: ConversionOptions) -> bytes:
    return scene_engine.export_scene(
        scene, 'gltf', binary=False, tree_postprocessor=_gltf_postprocessor(options))


def _export_glb(scene: trimesh.Scene, options: ConversionOptions) -> bytes:
    return scene_engine.export_scene(
        scene, 'glb', binary=True, tree_postprocessor=_gltf_postprocessor(options))


# Output format -> encoder; the container format picks its sub-mode from the tag
EXPORTERS: Dict[ModelFormat, Callable[[trimesh.Scene, ConversionOptions], bytes]] = {
    ModelFormat.STL: _export_stl,
    ModelFormat.OBJ: _export_obj,
    ModelFormat.GLTF: _export_gltf,
    ModelFormat.GLB: _export_glb,
}


def encode_model(scene: trimesh.Scene,
                 format: ModelFormat,
                 options: Optional[ConversionOptions] = None) -> bytes:
    """
    Encode a scene and stamp the attribution.

    Raises:
        UnsupportedFormatError: If the format cannot be exported
    """
    exporter = EXPORTERS.get(format)
    if exporter is None:
        raise UnsupportedFormatError(getattr(format, 'value', str(format)), direction='output')
    return exporter(scene, options or ConversionOptions())


async def export_model(scene: trimesh.Scene,
                       format: ModelFormat,
                       options: Optional[ConversionOptions] = None) -> bytes:
    """Encode a scene off the event loop; see encode_model."""
    return await asyncio.to_thread(encode_model, scene, format, options)
