#!/usr/bin/env python3
# ABOUTME: Basic usage examples for the model format converter
# ABOUTME: Demonstrates common conversion workflows

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from model_converter import (
    BatchItem,
    BatchOptions,
    ConversionOptions,
    ModelBlob,
    ModelConverter,
    glb_to_stl,
    setup_logging,
)


async def example_basic_conversion():
    """Convert a GLB file to binary STL."""
    print("Example 1: Basic Conversion")
    print("-" * 50)

    blob = await glb_to_stl(ModelBlob.from_path('input.glb'))
    Path('output.stl').write_bytes(blob.data)

    print(f"Wrote {blob.size} bytes ({blob.content_type})")
    print()


async def example_transforms():
    """Scale, re-center and turn a Y-up model into Z-up."""
    print("Example 2: Transforms")
    print("-" * 50)

    converter = ModelConverter()
    options = ConversionOptions(scale=25.4, center=True, flip_yz=True)
    result = await converter.convert(ModelBlob.from_path('input.obj'), 'obj', 'stl', options)
    Path('output_mm.stl').write_bytes(result.blob.data)

    bbox = result.metadata.bounding_box
    print(f"Triangles: {result.metadata.triangle_count}")
    print(f"Size: {bbox.size[0]:.2f} x {bbox.size[1]:.2f} x {bbox.size[2]:.2f}")
    print()


async def example_auto_detect():
    """Let the converter detect the input format from a URL."""
    print("Example 3: Auto Detection")
    print("-" * 50)

    converter = ModelConverter()
    result = await converter.convert_auto(
        'https://example.com/models/part.3mf',
        'glb',
        ConversionOptions(output_data='base64'),
    )

    print(f"GLB as base64: {result.base64[:40]}...")
    print()


async def example_batch():
    """Convert a folder of models two at a time."""
    print("Example 4: Batch Conversion")
    print("-" * 50)

    paths = sorted(Path('models').glob('*.*'))
    items = [BatchItem(ModelBlob.from_path(p), p.suffix, name=p.name) for p in paths]

    results = await ModelConverter().convert_batch(items, 'stl', BatchOptions(concurrency=2))
    for r in results:
        if r.success:
            print(f"  {r.item.name}: {r.result.metadata.byte_size} bytes")
        else:
            print(f"  {r.item.name}: FAILED ({r.error})")
    print()


if __name__ == '__main__':
    setup_logging(verbose=True)

    print("Model Format Converter - Usage Examples")
    print("=" * 50)
    print()

    # Note: These examples assume you have input model files
    # Uncomment the examples you want to run

    # asyncio.run(example_basic_conversion())
    # asyncio.run(example_transforms())
    # asyncio.run(example_auto_detect())
    # asyncio.run(example_batch())

    print("Note: Uncomment the examples you want to run")
    print("Make sure you have input model files (input.glb, input.obj, models/, etc.)")
