# ABOUTME: Data structures passed in and out of the conversion pipeline
# ABOUTME: Blobs, metadata, conversion results and batch records

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .formats import ModelFormat, FormatLike

Vector3 = Tuple[float, float, float]


@dataclass
class ModelBlob:
    """
    In-memory binary payload with optional type information.

    Attributes:
        data: Raw file bytes
        content_type: Declared MIME type, if known
        filename: Original file name, used for format detection
    """
    data: bytes
    content_type: Optional[str] = None
    filename: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.data, (bytearray, memoryview)):
            self.data = bytes(self.data)
        if not isinstance(self.data, bytes):
            raise TypeError(f"ModelBlob data must be bytes, got {type(self.data).__name__}")

    @property
    def size(self) -> int:
        return len(self.data)

    def read(self) -> bytes:
        return self.data

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: Optional[str] = None) -> 'ModelBlob':
        """Read a local file into a blob, keeping its name for detection."""
        path = Path(path)
        return cls(data=path.read_bytes(), content_type=content_type, filename=path.name)


# A remote locator, a blob, or a raw byte buffer
ConversionInput = Union[str, ModelBlob, bytes, bytearray, memoryview]


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounds in model coordinates after all transforms."""
    min: Vector3
    max: Vector3
    size: Vector3

    @property
    def center(self) -> Vector3:
        return tuple((lo + hi) / 2.0 for lo, hi in zip(self.min, self.max))

    def to_dict(self) -> dict:
        axes = ('x', 'y', 'z')
        return {
            'min': dict(zip(axes, self.min)),
            'max': dict(zip(axes, self.max)),
            'size': dict(zip(axes, self.size)),
        }


@dataclass(frozen=True)
class ModelMetadata:
    """Derived information about a converted model."""
    vertex_count: int
    triangle_count: int
    byte_size: int
    format: ModelFormat
    bounding_box: Optional[BoundingBox] = None

    def to_dict(self) -> dict:
        return {
            'vertices': self.vertex_count,
            'faces': self.triangle_count,
            'fileSize': self.byte_size,
            'format': self.format.value,
            'boundingBox': self.bounding_box.to_dict() if self.bounding_box else None,
        }


@dataclass
class ConversionResult:
    """
    Encoded output of a single conversion.

    ``blob`` is always populated. ``data`` is set for the bytes and base64
    output modes, ``base64`` only for the base64 mode.
    """
    blob: ModelBlob
    metadata: ModelMetadata
    data: Optional[bytes] = None
    base64: Optional[str] = None


@dataclass
class BatchItem:
    """One entry of a batch conversion request."""
    source: ConversionInput
    input_format: FormatLike
    name: Optional[str] = None


@dataclass
class BatchResult:
    """Outcome of one batch entry: either a result or a captured error."""
    item: BatchItem
    success: bool
    result: Optional[ConversionResult] = None
    error: Optional[Exception] = None
