# ABOUTME: Main conversion orchestrator
# ABOUTME: Composes load, transform, export and metadata and maps failures to error kinds

import logging
import time
from typing import List, Optional

import httpx

from ..config import BatchOptions, ConversionOptions
from ..errors import ConversionError, SlicedFileError, UnsupportedFormatError
from ..exporters import export_model
from ..formats import (
    FormatLike,
    ModelFormat,
    OutputData,
    coerce_input_format,
    coerce_output_format,
)
from ..loaders import DEFAULT_FETCH_TIMEOUT, load_model
from ..metadata import calculate_metadata
from ..models import (
    BatchItem,
    BatchResult,
    ConversionInput,
    ConversionResult,
    ModelBlob,
    ModelMetadata,
)
from ..transforms import apply_transformations
from ..utils.encoding import bytes_to_base64
from ..utils.logging_utils import Timer, TimingStats
from .batch import run_batch
from .router import FormatRouter

# Errors that are outcomes in their own right and pass through unwrapped
PASSTHROUGH_ERRORS = (UnsupportedFormatError, SlicedFileError, ConversionError)


class ModelConverter:
    """
    Converts 3D models between formats.

    Usage:
        converter = ModelConverter()
        result = await converter.convert(blob, 'glb', 'stl', ConversionOptions(scale=10))
        results = await converter.convert_batch(items, 'obj', BatchOptions(concurrency=2))
    """

    def __init__(self,
                 http_client: Optional[httpx.AsyncClient] = None,
                 fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize converter.

        Args:
            http_client: Client used for URL inputs (default: one per fetch)
            fetch_timeout: Timeout in seconds for URL inputs
            logger: Logger for diagnostics (default: the package logger)
        """
        self.http_client = http_client
        self.fetch_timeout = fetch_timeout
        self.logger = logger or logging.getLogger('model_converter')

    async def convert(self,
                      source: ConversionInput,
                      input_format: FormatLike,
                      output_format: FormatLike,
                      options: Optional[ConversionOptions] = None) -> ConversionResult:
        """
        Convert a 3D model from one format to another.

        Args:
            source: URL, ModelBlob, or raw bytes
            input_format: Format of the source
            output_format: Target format
            options: Conversion options (defaults apply when omitted)

        Returns:
            Encoded output with metadata

        Raises:
            UnsupportedFormatError: Input or output format is not supported
            SlicedFileError: A 3MF source contains toolpaths
            ConversionError: Anything else, with the original as its cause
        """
        opts = options or ConversionOptions()
        in_fmt = coerce_input_format(input_format)
        out_fmt = coerce_output_format(output_format)

        self.logger.debug("Converting: %s", FormatRouter.get_description(in_fmt, out_fmt))
        start_time = time.perf_counter()
        timings = TimingStats("Conversion", 0.0)

        try:
            with Timer("Load", self.logger) as timer:
                scene = await load_model(
                    source, in_fmt,
                    client=self.http_client,
                    timeout=self.fetch_timeout,
                    logger=self.logger,
                )
            timings.add_substep("Load", timer.elapsed)

            with Timer("Transform", self.logger) as timer:
                apply_transformations(scene, scale=opts.scale, center=opts.center, flip_yz=opts.flip_yz)
            timings.add_substep("Transform", timer.elapsed)

            with Timer("Export", self.logger) as timer:
                data = await export_model(scene, out_fmt, opts)
            timings.add_substep("Export", timer.elapsed)

            with Timer("Metadata", self.logger) as timer:
                metadata = calculate_metadata(scene, out_fmt, len(data))
            timings.add_substep("Metadata", timer.elapsed)

        except PASSTHROUGH_ERRORS:
            raise
        except Exception as e:
            raise ConversionError(f"Conversion failed: {e}", cause=e) from e

        timings.elapsed = time.perf_counter() - start_time
        self._log_timings(timings)
        return self._assemble(data, metadata, out_fmt, opts)

    async def convert_from_url(self, url: str, input_format: FormatLike, output_format: FormatLike,
                               options: Optional[ConversionOptions] = None) -> ConversionResult:
        """Convert a model downloaded from a URL."""
        return await self.convert(url, input_format, output_format, options)

    async def convert_from_blob(self, blob: ModelBlob, input_format: FormatLike, output_format: FormatLike,
                                options: Optional[ConversionOptions] = None) -> ConversionResult:
        """Convert a model held in a blob."""
        return await self.convert(blob, input_format, output_format, options)

    async def convert_from_buffer(self, buffer: bytes, input_format: FormatLike, output_format: FormatLike,
                                  options: Optional[ConversionOptions] = None) -> ConversionResult:
        """Convert a model held in a raw byte buffer."""
        return await self.convert(buffer, input_format, output_format, options)

    async def convert_auto(self,
                           source: ConversionInput,
                           output_format: FormatLike,
                           options: Optional[ConversionOptions] = None) -> ConversionResult:
        """
        Detect the input format, then convert.

        Raises:
            ConversionError: If no format could be detected
        """
        detected = FormatRouter.detect(source)
        if detected is None:
            raise ConversionError("Could not detect input format. Please specify explicitly.")
        self.logger.debug("Detected input format: %s", detected.value)
        return await self.convert(source, detected, output_format, options)

    async def convert_batch(self,
                            items: List[BatchItem],
                            output_format: FormatLike,
                            options: Optional[BatchOptions] = None) -> List[BatchResult]:
        """
        Convert many models with bounded concurrency.

        Item failures are recorded in their result entry and never abort the
        batch. Results come back in input order.
        """
        opts = options or BatchOptions()
        return await run_batch(
            self.convert,
            items,
            output_format,
            opts,
            concurrency=opts.concurrency,
            logger=self.logger,
        )

    def _assemble(self, data: bytes, metadata: ModelMetadata, format: ModelFormat,
                  options: ConversionOptions) -> ConversionResult:
        result = ConversionResult(
            blob=ModelBlob(data=data, content_type=format.mime_type),
            metadata=metadata,
        )

        if options.output_data in (OutputData.BYTES, OutputData.BASE64):
            result.data = data
        if options.output_data is OutputData.BASE64:
            result.base64 = bytes_to_base64(data)

        return result

    def _log_timings(self, timings: TimingStats) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.logger.debug("Timing breakdown:\n%s", timings.format_tree(timings.elapsed))
