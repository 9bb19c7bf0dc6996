# ABOUTME: End-to-end tests for ModelConverter and the convenience shortcuts
# ABOUTME: Covers every format pair, transforms, output modes and error mapping

import asyncio
import base64
import io
import json
import logging
import sys
from pathlib import Path

import httpx
import numpy as np
import pytest
import trimesh

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from model_converter import (
    ConversionError,
    ConversionOptions,
    ModelBlob,
    ModelConverter,
    ModelFormat,
    SlicedFileError,
    UnsupportedFormatError,
    auto_to_stl,
    convert_with_metadata,
    glb_to_stl,
    obj_to_glb,
    stl_to_gltf,
    stl_to_obj,
    threemf_to_stl,
)
from model_converter.config import ATTRIBUTION_TEXT

INPUTS = ['stl', 'obj', 'glb', 'gltf', '3mf']
OUTPUTS = ['stl', 'obj', 'gltf', 'glb']


def convert(source, input_format, output_format, options=None, **kwargs):
    return asyncio.run(ModelConverter(**kwargs).convert(source, input_format, output_format, options))


def bbox_size(result):
    return np.array(result.metadata.bounding_box.size)


class TestFormatPairs:
    """Every supported input converts to every supported output."""

    @pytest.mark.parametrize("output_format", OUTPUTS)
    @pytest.mark.parametrize("input_format", INPUTS)
    def test_pair(self, model_bytes, input_format, output_format):
        result = convert(model_bytes[input_format], input_format, output_format)

        assert result.metadata.format is ModelFormat(output_format)
        assert result.metadata.byte_size == len(result.blob.data)
        assert result.metadata.triangle_count == 12
        assert result.blob.content_type == ModelFormat(output_format).mime_type
        np.testing.assert_allclose(bbox_size(result), [2.0, 4.0, 6.0], atol=1e-5)

    def test_stl_output_reloads(self, glb_bytes):
        result = convert(glb_bytes, 'glb', 'stl')
        mesh = trimesh.load(io.BytesIO(result.blob.data), file_type='stl')
        assert len(mesh.faces) == 12

    def test_accepts_enum_tags(self, stl_bytes):
        result = convert(stl_bytes, ModelFormat.STL, ModelFormat.GLB)
        assert result.metadata.format is ModelFormat.GLB


class TestTransformOptions:
    """Transforms are reflected in the metadata bounding box."""

    def test_scale(self, stl_bytes):
        base = convert(stl_bytes, 'stl', 'stl')
        scaled = convert(stl_bytes, 'stl', 'stl', ConversionOptions(scale=10))
        np.testing.assert_allclose(bbox_size(scaled), bbox_size(base) * 10, rtol=1e-6)

    def test_center(self, offset_stl_bytes):
        result = convert(offset_stl_bytes, 'stl', 'obj', ConversionOptions(center=True))
        np.testing.assert_allclose(result.metadata.bounding_box.center, [0.0, 0.0, 0.0], atol=1e-6)

    def test_scale_and_center(self, offset_stl_bytes):
        result = convert(offset_stl_bytes, 'stl', 'glb', ConversionOptions(scale=0.5, center=True))
        np.testing.assert_allclose(result.metadata.bounding_box.center, [0.0, 0.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(bbox_size(result), [1.0, 2.0, 3.0], atol=1e-6)

    def test_flip_yz(self, stl_bytes):
        result = convert(stl_bytes, 'stl', 'stl', ConversionOptions(flip_yz=True))
        np.testing.assert_allclose(bbox_size(result), [2.0, 6.0, 4.0], atol=1e-6)

    def test_flip_twice_restores_bounds(self, offset_stl_bytes):
        opts = ConversionOptions(flip_yz=True)
        once = convert(offset_stl_bytes, 'stl', 'stl', opts)
        twice = convert(once.blob.data, 'stl', 'stl', opts)

        original = convert(offset_stl_bytes, 'stl', 'stl')
        np.testing.assert_allclose(twice.metadata.bounding_box.min, original.metadata.bounding_box.min, atol=1e-5)
        np.testing.assert_allclose(twice.metadata.bounding_box.max, original.metadata.bounding_box.max, atol=1e-5)
        assert twice.metadata.triangle_count == original.metadata.triangle_count
        assert twice.metadata.vertex_count == original.metadata.vertex_count


class TestOutputModes:
    """Test blob, bytes and base64 result shapes."""

    def test_blob_only_by_default(self, stl_bytes):
        result = convert(stl_bytes, 'stl', 'obj')
        assert result.blob.data
        assert result.data is None
        assert result.base64 is None

    def test_bytes_mode(self, stl_bytes):
        result = convert(stl_bytes, 'stl', 'obj', ConversionOptions(output_data='bytes'))
        assert result.data == result.blob.data
        assert result.base64 is None

    def test_base64_mode(self, stl_bytes):
        result = convert(stl_bytes, 'stl', 'glb', ConversionOptions(output_data='base64'))
        assert result.data == result.blob.data
        assert base64.b64decode(result.base64) == result.blob.data


class TestAttribution:
    """Test the attribution toggle end to end."""

    def test_binary_stl_length_unchanged(self, glb_bytes):
        plain = convert(glb_bytes, 'glb', 'stl', ConversionOptions(add_attribution=False))
        stamped = convert(glb_bytes, 'glb', 'stl')
        assert len(plain.blob.data) == len(stamped.blob.data)
        assert stamped.blob.data.startswith(ATTRIBUTION_TEXT.encode('ascii'))

    def test_gltf_asset_generator(self, obj_bytes):
        result = convert(obj_bytes, 'obj', 'gltf')
        tree = json.loads(result.blob.data)
        assert tree['asset']['copyright'] == ATTRIBUTION_TEXT


class TestErrors:
    """Test error kinds surfaced by the converter."""

    def test_unknown_output_format(self, stl_bytes):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            convert(stl_bytes, 'stl', 'fbx')
        assert exc_info.value.direction == 'output'

    def test_threemf_output_unsupported(self, stl_bytes):
        with pytest.raises(UnsupportedFormatError):
            convert(stl_bytes, 'stl', '3mf')

    def test_unknown_input_format(self, stl_bytes):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            convert(stl_bytes, 'fbx', 'stl')
        assert exc_info.value.direction == 'input'

    def test_sliced_archive(self, sliced_threemf_bytes):
        with pytest.raises(SlicedFileError):
            convert(sliced_threemf_bytes, '3mf', 'stl')

    def test_malformed_payload_wrapped(self):
        with pytest.raises(ConversionError) as exc_info:
            convert(b'definitely not a glb file', 'glb', 'stl')
        assert exc_info.value.cause is not None
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert str(exc_info.value).startswith("Conversion failed:")

    def test_empty_payload_wrapped(self):
        with pytest.raises(ConversionError):
            convert(b'', 'stl', 'obj')

    def test_unsupported_input_type(self):
        with pytest.raises(ConversionError):
            convert(42, 'stl', 'obj')

    def test_error_kinds_share_base(self):
        from model_converter import ConverterError
        assert issubclass(UnsupportedFormatError, ConverterError)
        assert issubclass(SlicedFileError, ConverterError)
        assert issubclass(ConversionError, ConverterError)


class TestRemoteAndAuto:
    """Test URL inputs and automatic format detection."""

    @pytest.fixture
    def client_factory(self, stl_bytes):
        def handler(request):
            if request.url.path == '/files/model.stl':
                return httpx.Response(200, content=stl_bytes)
            return httpx.Response(404)

        def factory():
            return httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return factory

    def test_convert_from_url(self, client_factory):
        async def run():
            async with client_factory() as client:
                converter = ModelConverter(http_client=client)
                return await converter.convert_from_url('https://example.com/files/model.stl', 'stl', 'obj')

        result = asyncio.run(run())
        assert result.metadata.triangle_count == 12

    def test_remote_not_found(self, client_factory):
        async def run():
            async with client_factory() as client:
                converter = ModelConverter(http_client=client)
                return await converter.convert('https://example.com/files/gone.stl', 'stl', 'obj')

        with pytest.raises(ConversionError) as exc_info:
            asyncio.run(run())
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)

    def test_auto_from_url_with_query(self, client_factory):
        async def run():
            async with client_factory() as client:
                converter = ModelConverter(http_client=client)
                return await converter.convert_auto('https://example.com/files/model.stl?sig=abc', 'glb')

        result = asyncio.run(run())
        assert result.metadata.format is ModelFormat.GLB

    def test_auto_from_blob(self, glb_bytes):
        blob = ModelBlob(data=glb_bytes, filename='part.glb')
        result = asyncio.run(ModelConverter().convert_auto(blob, 'stl'))
        assert result.metadata.format is ModelFormat.STL

    def test_auto_from_raw_bytes_fails(self, glb_bytes):
        with pytest.raises(ConversionError) as exc_info:
            asyncio.run(ModelConverter().convert_auto(glb_bytes, 'stl'))
        assert "Could not detect input format" in str(exc_info.value)

    def test_convert_from_blob_and_buffer(self, stl_bytes):
        converter = ModelConverter()
        from_blob = asyncio.run(converter.convert_from_blob(ModelBlob(stl_bytes), 'stl', 'obj'))
        from_buffer = asyncio.run(converter.convert_from_buffer(bytearray(stl_bytes), 'stl', 'obj'))
        assert from_blob.blob.data == from_buffer.blob.data


class TestTimingLog:
    """Test the per-stage timing breakdown."""

    def test_breakdown_logged_at_debug(self, stl_bytes, caplog):
        logger = logging.getLogger('test_converter_sink')
        with caplog.at_level(logging.DEBUG, logger='test_converter_sink'):
            asyncio.run(ModelConverter(logger=logger).convert(stl_bytes, 'stl', 'obj'))

        breakdown = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Timing breakdown")]
        assert len(breakdown) == 1
        lines = breakdown[0].split('\n')[1:]
        assert lines[0].startswith("Conversion")
        assert [line.split()[0] for line in lines[1:]] == ["Load", "Transform", "Export", "Metadata"]

    def test_no_breakdown_above_debug(self, stl_bytes, caplog):
        logger = logging.getLogger('test_converter_sink')
        with caplog.at_level(logging.INFO, logger='test_converter_sink'):
            asyncio.run(ModelConverter(logger=logger).convert(stl_bytes, 'stl', 'obj'))

        assert not any(r.getMessage().startswith("Timing breakdown") for r in caplog.records)


class TestShortcuts:
    """Test the convenience coroutines."""

    def test_glb_to_stl(self, glb_bytes):
        blob = asyncio.run(glb_to_stl(glb_bytes))
        assert blob.content_type == 'model/stl'

    def test_stl_to_obj(self, stl_bytes):
        blob = asyncio.run(stl_to_obj(stl_bytes, ConversionOptions(add_attribution=False)))
        assert blob.content_type == 'model/obj'
        assert b'Polar3d' not in blob.data

    def test_stl_to_gltf(self, stl_bytes):
        blob = asyncio.run(stl_to_gltf(stl_bytes))
        assert json.loads(blob.data)['asset']['version'] == '2.0'

    def test_obj_to_glb(self, obj_bytes):
        blob = asyncio.run(obj_to_glb(obj_bytes))
        assert blob.data[:4] == b'glTF'

    def test_threemf_to_stl(self, threemf_bytes):
        blob = asyncio.run(threemf_to_stl(threemf_bytes))
        assert blob.size == 84 + 50 * 12

    def test_auto_to_stl(self, obj_bytes):
        blob = asyncio.run(auto_to_stl(ModelBlob(obj_bytes, content_type='model/obj')))
        assert blob.content_type == 'model/stl'

    def test_convert_with_metadata(self, stl_bytes):
        result = asyncio.run(convert_with_metadata(stl_bytes, 'stl', 'glb'))
        assert result.metadata.byte_size == result.blob.size
