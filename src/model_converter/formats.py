# ABOUTME: Closed set of model format tags and their MIME types
# ABOUTME: Separates input-capable formats from output-capable formats

from enum import Enum
from typing import Union

from .errors import UnsupportedFormatError


class ModelFormat(str, Enum):
    """Format tags understood by the converter."""

    GLB = 'glb'
    GLTF = 'gltf'
    OBJ = 'obj'
    STL = 'stl'
    THREEMF = '3mf'

    @property
    def mime_type(self) -> str:
        return get_mime_type(self.value)

    @property
    def extension(self) -> str:
        return f'.{self.value}'


class OutputData(str, Enum):
    """Representation(s) of the encoded bytes returned to the caller."""

    BLOB = 'blob'
    BYTES = 'bytes'
    BASE64 = 'base64'


# The archive format is input only; the asymmetry is intentional
INPUT_FORMATS = frozenset({
    ModelFormat.GLB,
    ModelFormat.GLTF,
    ModelFormat.OBJ,
    ModelFormat.STL,
    ModelFormat.THREEMF,
})

OUTPUT_FORMATS = frozenset({
    ModelFormat.STL,
    ModelFormat.OBJ,
    ModelFormat.GLTF,
    ModelFormat.GLB,
})

MIME_TYPES = {
    'stl': 'model/stl',
    'obj': 'model/obj',
    'gltf': 'model/gltf+json',
    'glb': 'model/gltf-binary',
    '3mf': 'model/3mf',
}

DEFAULT_MIME_TYPE = 'application/octet-stream'

FormatLike = Union[ModelFormat, str]


def get_mime_type(format: FormatLike) -> str:
    """Return the MIME type for a format tag, or the generic octet-stream type."""
    key = format.value if isinstance(format, ModelFormat) else str(format).lower()
    return MIME_TYPES.get(key, DEFAULT_MIME_TYPE)


def parse_format(value: FormatLike) -> ModelFormat:
    """
    Turn a user supplied tag into a ModelFormat.

    Accepts enum members or strings such as 'STL' or '.glb'.

    Raises:
        UnsupportedFormatError: If the value names no known format
    """
    if isinstance(value, ModelFormat):
        return value
    if not isinstance(value, str):
        raise UnsupportedFormatError(repr(value))
    try:
        return ModelFormat(value.strip().lower().lstrip('.'))
    except ValueError:
        raise UnsupportedFormatError(value) from None


def coerce_input_format(value: FormatLike) -> ModelFormat:
    """Parse a tag and require that it can be loaded."""
    try:
        fmt = parse_format(value)
    except UnsupportedFormatError:
        raise UnsupportedFormatError(str(value), direction='input') from None
    if fmt not in INPUT_FORMATS:
        raise UnsupportedFormatError(fmt.value, direction='input')
    return fmt


def coerce_output_format(value: FormatLike) -> ModelFormat:
    """Parse a tag and require that it can be exported."""
    try:
        fmt = parse_format(value)
    except UnsupportedFormatError:
        raise UnsupportedFormatError(str(value), direction='output') from None
    if fmt not in OUTPUT_FORMATS:
        raise UnsupportedFormatError(fmt.value, direction='output')
    return fmt
