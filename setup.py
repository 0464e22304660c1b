import logging
import os

from setuptools import find_packages, setup

PACKAGE_NAME = "objremap"
VERSION = "0.1.0"
DESCRIPTION = "objremap: Wavefront OBJ/MTL loading and single-index vertex remapping"
URL = "<url.to.go.in.here>"
AUTHOR = "objremap developers"
LICENSE = "MIT"
DOWNLOAD_URL = ""
LONG_DESCRIPTION = """
Loads triangulated Wavefront OBJ meshes and their MTL material libraries into
JAX arrays, and remaps multi-index faces (separate position and texcoord
indices) into a single-index vertex buffer with recomputed normals.
"""
CLASSIFIERS = [
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3 :: Only",
    "License :: OSI Approved :: MIT License",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

cwd = os.path.dirname(os.path.abspath(__file__))
logger = logging.getLogger()
logging.basicConfig(format="%(levelname)s - %(message)s")


def get_requirements():
    return [
        "jax",
        "jaxlib",
        "numpy",
        "pyyaml",
        "tqdm",
    ]


if __name__ == "__main__":
    setup(
        # Metadata
        name=PACKAGE_NAME,
        version=VERSION,
        author=AUTHOR,
        description=DESCRIPTION,
        url=URL,
        long_description=LONG_DESCRIPTION,
        license=LICENSE,
        python_requires=">=3.9",
        # Package info
        packages=find_packages(exclude=("docs", "tests", "examples")),
        install_requires=get_requirements(),
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["objremap = objremap.cli:main"]},
        zip_safe=True,
        classifiers=CLASSIFIERS,
    )
