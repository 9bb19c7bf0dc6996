# ABOUTME: Shared pytest fixtures for the converter test suite
# ABOUTME: Builds small in-memory models in every supported input format

import io
import zipfile

import pytest
import trimesh
from trimesh.exchange.gltf import export_glb, export_gltf
from trimesh.exchange.obj import export_obj
from trimesh.exchange.stl import export_stl
from trimesh.exchange.threemf import export_3MF

# Box extents used throughout; bounds are [-1, -2, -3] .. [1, 2, 3]
BOX_EXTENTS = [2.0, 4.0, 6.0]
BOX_TRIANGLES = 12


@pytest.fixture
def box_mesh():
    """Axis-aligned box centered on the origin."""
    return trimesh.creation.box(extents=BOX_EXTENTS)


@pytest.fixture
def offset_box_mesh():
    """Same box moved away from the origin."""
    mesh = trimesh.creation.box(extents=BOX_EXTENTS)
    mesh.apply_translation([10.0, -5.0, 3.0])
    return mesh


@pytest.fixture
def stl_bytes(box_mesh):
    return export_stl(box_mesh)


@pytest.fixture
def offset_stl_bytes(offset_box_mesh):
    return export_stl(offset_box_mesh)


@pytest.fixture
def obj_bytes(box_mesh):
    return export_obj(box_mesh, include_texture=False).encode('utf-8')


@pytest.fixture
def glb_bytes(box_mesh):
    return export_glb(trimesh.Scene(box_mesh))


@pytest.fixture
def gltf_bytes(box_mesh):
    files = export_gltf(trimesh.Scene(box_mesh), merge_buffers=True, embed_buffers=True)
    return files['model.gltf']


@pytest.fixture
def threemf_bytes(box_mesh):
    return export_3MF(box_mesh)


@pytest.fixture
def sliced_threemf_bytes(threemf_bytes):
    """A valid 3MF archive with a toolpath entry added."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(threemf_bytes)) as source, \
            zipfile.ZipFile(buffer, 'w') as target:
        for info in source.infolist():
            target.writestr(info, source.read(info.filename))
        target.writestr('Metadata/layer_001.gcode', 'G28\nG1 X10 Y10\n')
    return buffer.getvalue()


@pytest.fixture
def model_bytes(stl_bytes, obj_bytes, glb_bytes, gltf_bytes, threemf_bytes):
    """Encoded box keyed by input format tag."""
    return {
        'stl': stl_bytes,
        'obj': obj_bytes,
        'glb': glb_bytes,
        'gltf': gltf_bytes,
        '3mf': threemf_bytes,
    }
