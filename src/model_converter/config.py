# ABOUTME: Configuration dataclasses for single and batch conversions
# ABOUTME: Validates user inputs and provides defaults

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .formats import OutputData

# Attribution stamped into exported files
ATTRIBUTION_TEXT = 'Created using Polar3d.com'
ATTRIBUTION_URL = 'https://polar3d.com'
ATTRIBUTION_GENERATOR = 'Polar3d.com Model Converter'

DEFAULT_CONCURRENCY = 4


@dataclass
class ConversionOptions:
    """Options for a single model conversion."""

    binary: bool = True  # Binary sub-mode where the target format has one
    include_normals: bool = True  # Advisory, normals follow the scene engine
    merge_meshes: bool = False  # Advisory, meshes are exported as loaded
    scale: float = 1.0
    center: bool = False
    flip_yz: bool = False
    output_data: Union[OutputData, str] = OutputData.BLOB
    add_attribution: bool = True

    # Accepted for API compatibility but never called by the pipeline yet
    on_progress: Optional[Callable[[float], None]] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.scale, bool) or not isinstance(self.scale, (int, float)):
            raise ValueError(f"Invalid scale: {self.scale!r}")
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ValueError(f"Scale must be a positive finite number, got {self.scale}")
        self.scale = float(self.scale)

        if not isinstance(self.output_data, OutputData):
            try:
                self.output_data = OutputData(str(self.output_data).lower())
            except ValueError:
                valid = ', '.join(o.value for o in OutputData)
                raise ValueError(
                    f"Invalid output data mode: {self.output_data}. Supported: {valid}"
                ) from None

        if self.on_progress is not None and not callable(self.on_progress):
            raise ValueError("on_progress must be callable")


@dataclass
class BatchOptions(ConversionOptions):
    """Conversion options plus the batch concurrency ceiling."""

    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self):
        super().__post_init__()

        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int):
            raise ValueError(f"Invalid concurrency: {self.concurrency!r}")
        if self.concurrency < 1:
            raise ValueError("Concurrency must be at least 1")
