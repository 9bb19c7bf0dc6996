# ABOUTME: Package initialization for the 3D model format converter
# ABOUTME: Exports the converter, data types, errors and convenience functions

from .config import BatchOptions, ConversionOptions
from .errors import ConversionError, ConverterError, SlicedFileError, UnsupportedFormatError
from .formats import INPUT_FORMATS, OUTPUT_FORMATS, ModelFormat, OutputData, get_mime_type
from .models import (
    BatchItem,
    BatchResult,
    BoundingBox,
    ConversionResult,
    ModelBlob,
    ModelMetadata,
)
from .pipeline import FormatRouter, ModelConverter, detect_format
from .shortcuts import (
    any_to_stl,
    auto_to_stl,
    convert_with_metadata,
    glb_to_obj,
    glb_to_stl,
    gltf_to_stl,
    obj_to_glb,
    obj_to_stl,
    stl_to_glb,
    stl_to_gltf,
    stl_to_obj,
    threemf_to_obj,
    threemf_to_stl,
)
from .sliced import is_sliced_3mf
from .utils.encoding import base64_to_bytes, bytes_to_base64
from .utils.logging_utils import setup_logging

__version__ = "0.1.0"

__all__ = [
    "ModelConverter",
    "ConversionOptions",
    "BatchOptions",
    "ModelFormat",
    "OutputData",
    "INPUT_FORMATS",
    "OUTPUT_FORMATS",
    "ModelBlob",
    "ModelMetadata",
    "BoundingBox",
    "ConversionResult",
    "BatchItem",
    "BatchResult",
    "ConverterError",
    "UnsupportedFormatError",
    "SlicedFileError",
    "ConversionError",
    "FormatRouter",
    "detect_format",
    "is_sliced_3mf",
    "get_mime_type",
    "bytes_to_base64",
    "base64_to_bytes",
    "setup_logging",
    "glb_to_stl",
    "gltf_to_stl",
    "obj_to_stl",
    "stl_to_obj",
    "stl_to_glb",
    "stl_to_gltf",
    "glb_to_obj",
    "obj_to_glb",
    "threemf_to_stl",
    "threemf_to_obj",
    "any_to_stl",
    "auto_to_stl",
    "convert_with_metadata",
]
