# ABOUTME: Format detection and routing for conversion inputs
# ABOUTME: Infers the source format from a URL, file name, or declared content type

from typing import Optional
from urllib.parse import urlsplit

from ..formats import ModelFormat
from ..models import ModelBlob

# Extension -> format for everything the loader can read
EXTENSION_FORMATS = {
    '.glb': ModelFormat.GLB,
    '.gltf': ModelFormat.GLTF,
    '.obj': ModelFormat.OBJ,
    '.stl': ModelFormat.STL,
    '.3mf': ModelFormat.THREEMF,
}

# Declared content type -> format
CONTENT_TYPE_FORMATS = {
    'model/gltf-binary': ModelFormat.GLB,
    'model/gltf+json': ModelFormat.GLTF,
    'model/obj': ModelFormat.OBJ,
    'model/stl': ModelFormat.STL,
    'application/sla': ModelFormat.STL,
    'model/3mf': ModelFormat.THREEMF,
}


class FormatRouter:
    """Determines the input format of a conversion source."""

    @staticmethod
    def from_name(name: Optional[str]) -> Optional[ModelFormat]:
        """Match a file name or path against the known extensions."""
        if not name:
            return None
        lower = name.lower()
        for extension, fmt in EXTENSION_FORMATS.items():
            if lower.endswith(extension):
                return fmt
        return None

    @staticmethod
    def from_url(url: str) -> Optional[ModelFormat]:
        """Match the path component of a URL, ignoring query and fragment."""
        try:
            path = urlsplit(url).path
        except ValueError:
            path = url
        return FormatRouter.from_name(path or url)

    @staticmethod
    def from_content_type(content_type: Optional[str]) -> Optional[ModelFormat]:
        if not content_type:
            return None
        mime = content_type.split(';', 1)[0].strip().lower()
        return CONTENT_TYPE_FORMATS.get(mime)

    @staticmethod
    def detect(source) -> Optional[ModelFormat]:
        """
        Infer the input format of a conversion source.

        Args:
            source: URL string, ModelBlob, or raw bytes

        Returns:
            Detected format, or None when nothing matches. Raw byte buffers
            carry no hints and always yield None.
        """
        if isinstance(source, str):
            return FormatRouter.from_url(source)

        if isinstance(source, ModelBlob):
            # a declared content type wins over the file name
            return (FormatRouter.from_content_type(source.content_type)
                    or FormatRouter.from_name(source.filename))

        return None

    @staticmethod
    def get_description(input_format: ModelFormat, output_format: ModelFormat) -> str:
        """Human-readable description of the processing path."""
        return (f"{input_format.value.upper()} load -> transform -> "
                f"{output_format.value.upper()} export -> metadata")


def detect_format(source) -> Optional[ModelFormat]:
    """Module-level shortcut for FormatRouter.detect."""
    return FormatRouter.detect(source)
