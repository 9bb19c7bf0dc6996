# ABOUTME: Convenience coroutines for common format pairs
# ABOUTME: Thin wrappers around ModelConverter returning only the encoded blob

from typing import Optional

from .config import ConversionOptions
from .formats import FormatLike, ModelFormat
from .models import ConversionInput, ConversionResult, ModelBlob
from .pipeline.orchestrator import ModelConverter


async def _convert_blob(source: ConversionInput, input_format: FormatLike, output_format: FormatLike,
                        options: Optional[ConversionOptions]) -> ModelBlob:
    result = await ModelConverter().convert(source, input_format, output_format, options)
    return result.blob


async def glb_to_stl(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.GLB, ModelFormat.STL, options)


async def gltf_to_stl(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.GLTF, ModelFormat.STL, options)


async def obj_to_stl(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.OBJ, ModelFormat.STL, options)


async def stl_to_obj(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.STL, ModelFormat.OBJ, options)


async def stl_to_glb(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.STL, ModelFormat.GLB, options)


async def stl_to_gltf(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.STL, ModelFormat.GLTF, options)


async def glb_to_obj(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.GLB, ModelFormat.OBJ, options)


async def obj_to_glb(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.OBJ, ModelFormat.GLB, options)


async def threemf_to_stl(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.THREEMF, ModelFormat.STL, options)


async def threemf_to_obj(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    return await _convert_blob(source, ModelFormat.THREEMF, ModelFormat.OBJ, options)


async def any_to_stl(source: ConversionInput, input_format: FormatLike,
                     options: Optional[ConversionOptions] = None) -> ModelBlob:
    """Convert any supported input format to STL."""
    return await _convert_blob(source, input_format, ModelFormat.STL, options)


async def auto_to_stl(source: ConversionInput, options: Optional[ConversionOptions] = None) -> ModelBlob:
    """Detect the input format and convert to STL."""
    result = await ModelConverter().convert_auto(source, ModelFormat.STL, options)
    return result.blob


async def convert_with_metadata(source: ConversionInput, input_format: FormatLike, output_format: FormatLike,
                                options: Optional[ConversionOptions] = None) -> ConversionResult:
    """Full conversion result including metadata."""
    return await ModelConverter().convert(source, input_format, output_format, options)
