# ABOUTME: Loader dispatch from conversion inputs to parsed scenes
# ABOUTME: Normalizes URLs, blobs and buffers to bytes and gates sliced 3MF files

import asyncio
import logging
from typing import Optional

import httpx
import trimesh

from . import scene_engine
from .errors import ConversionError, SlicedFileError
from .formats import FormatLike, ModelFormat, coerce_input_format
from .models import ConversionInput, ModelBlob
from .sliced import is_sliced_3mf

DEFAULT_FETCH_TIMEOUT = 120.0

# Input format -> scene engine file type
LOADER_FILE_TYPES = {
    ModelFormat.GLB: 'glb',
    ModelFormat.GLTF: 'gltf',
    ModelFormat.OBJ: 'obj',
    ModelFormat.STL: 'stl',
    ModelFormat.THREEMF: '3mf',
}


async def load_from_url(url: str,
                        client: Optional[httpx.AsyncClient] = None,
                        timeout: float = DEFAULT_FETCH_TIMEOUT) -> bytes:
    """
    Download a model file.

    Args:
        url: http(s) URL
        client: Shared client to reuse; a short-lived one is created otherwise
        timeout: Request timeout in seconds for the short-lived client

    Raises:
        httpx.HTTPStatusError: If the response is not successful
        httpx.HTTPError: On transport failures
    """
    logger = logging.getLogger('model_converter')
    logger.debug("Fetching model: %s", url[:120])

    if client is not None:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.content

    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True) as owned:
        resp = await owned.get(url)
        resp.raise_for_status()
        return resp.content


async def read_source(source: ConversionInput,
                      client: Optional[httpx.AsyncClient] = None,
                      timeout: float = DEFAULT_FETCH_TIMEOUT) -> bytes:
    """Normalize any admissible conversion input into a byte buffer."""
    if isinstance(source, str):
        return await load_from_url(source, client=client, timeout=timeout)
    if isinstance(source, ModelBlob):
        return source.read()
    if isinstance(source, bytes):
        return source
    if isinstance(source, (bytearray, memoryview)):
        return bytes(source)
    raise ConversionError(f"Unsupported input type: {type(source).__name__}")


async def load_model(source: ConversionInput,
                     format: FormatLike,
                     client: Optional[httpx.AsyncClient] = None,
                     timeout: float = DEFAULT_FETCH_TIMEOUT,
                     logger: Optional[logging.Logger] = None) -> trimesh.Scene:
    """
    Load a model into a scene with resolved world transforms.

    Args:
        source: URL, blob, or raw bytes
        format: Declared input format
        client: Optional HTTP client for URL sources
        timeout: Fetch timeout for URL sources
        logger: Diagnostic sink passed on to the sliced-file guard

    Raises:
        UnsupportedFormatError: If the format cannot be loaded
        SlicedFileError: If a 3MF archive contains toolpath entries
    """
    format = coerce_input_format(format)
    file_type = LOADER_FILE_TYPES[format]

    data = await read_source(source, client=client, timeout=timeout)

    # must run before any parsing is attempted
    if format is ModelFormat.THREEMF and is_sliced_3mf(data, logger=logger):
        raise SlicedFileError('3MF')

    scene = await asyncio.to_thread(scene_engine.load_scene, data, file_type)
    scene_engine.resolve_world_transforms(scene)
    return scene
