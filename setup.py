# ABOUTME: Package setup configuration
# ABOUTME: Enables pip installation of the model converter library

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / 'README.md'
long_description = readme_file.read_text() if readme_file.exists() else ''

setup(
    name='model-format-converter',
    version='0.1.0',
    description='Convert 3D models between GLB, glTF, OBJ, STL and 3MF with transforms and metadata',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.24.0',
        'trimesh>=4.6.0',
        'pillow>=10.0.0',
        'httpx>=0.24.0',
        # trimesh soft dependencies needed for 3MF parsing
        'lxml>=4.9.0',
        'networkx>=3.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Multimedia :: Graphics :: 3D Modeling',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    keywords='3d-models mesh-conversion stl gltf glb obj 3mf',
)
