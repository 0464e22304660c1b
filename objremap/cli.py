import argparse
import logging
import os
import re

import numpy as np
import yaml
from tqdm import tqdm

from .errors import ObjRemapError
from .obj import ObjModel
from .remap import remap_submesh

logger = logging.getLogger(__name__)


def get_parser():
    parser = argparse.ArgumentParser(
        prog="objremap",
        description="Load a triangulated OBJ file and remap its vertices so that"
        " every vertex has a single (position, texcoord) pair.",
    )
    parser.add_argument("path", type=str, help="Path to the .obj file.")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--mesh-index", type=int, default=0, help="Index of the sub-mesh to remap."
    )
    group.add_argument("--all", action="store_true", help="Remap every sub-mesh.")
    parser.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="If set, write each remapped sub-mesh to <out-dir>/<index>_<name>.npz.",
    )
    parser.add_argument(
        "--summary",
        type=str,
        default=None,
        help="If set, dump a YAML summary of the run to this file.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    return parser


def output_filename(idx, name):
    r"""File name for a remapped sub-mesh, unique per index and path-safe."""
    safe_name = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("._") or "mesh"
    return f"{idx:03d}_{safe_name}.npz"


def summarize(model, remapped):
    return {
        "path": model.path,
        "positions": int(model.positions.shape[0]),
        "texcoords": int(model.texcoords.shape[0]),
        "normals": int(model.normals.shape[0]),
        "materials": [material.name for material in model.materials],
        "diagnostics": [str(d) for d in model.diagnostics],
        "meshes": [
            {
                "name": mesh.name,
                "faces": int(mesh.num_faces),
                "vertices": int(mesh.num_vertices),
                "material": mesh.material.name if mesh.material is not None else None,
            }
            for mesh in remapped
        ],
    }


def main(argv=None):
    args = get_parser().parse_args(argv)
    logging.basicConfig(
        format="%(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        model = ObjModel.from_file(args.path)
    except ObjRemapError as e:
        logger.error(f"load obj: {args.path} failed: {e}")
        return 1
    if not model.meshes:
        logger.error(f"{args.path} contains no faces.")
        return 1

    if args.all:
        selected = list(range(len(model.meshes)))
    elif 0 <= args.mesh_index < len(model.meshes):
        selected = [args.mesh_index]
    else:
        logger.error(
            f"Sub-mesh index {args.mesh_index} out of range ({len(model.meshes)} sub-meshes)."
        )
        return 1

    remapped = []
    try:
        for idx in tqdm(selected, desc="remap", disable=len(selected) < 2):
            remapped.append(remap_submesh(model, idx))
    except ObjRemapError as e:
        logger.error(str(e))
        return 1

    for idx, mesh in zip(selected, remapped):
        logger.info(f"{mesh.name}: {mesh.num_faces} faces, {mesh.num_vertices} vertices")
        if args.out_dir is not None:
            os.makedirs(args.out_dir, exist_ok=True)
            out_path = os.path.join(args.out_dir, output_filename(idx, mesh.name))
            np.savez(out_path, **mesh.to_numpy())

    if args.summary is not None:
        with open(args.summary, "w") as f:
            yaml.dump(summarize(model, remapped), f, default_flow_style=False)

    logger.info("Done.")
    return 0
