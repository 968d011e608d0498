import argparse
import math
from pathlib import Path

from mesh2schematic.config import ExplicitEdgeLength, TargetAxisDivisions, VoxelizationConfig
from mesh2schematic.export import ENCODERS, get_encoder
from mesh2schematic.logging_config import setup_logging
from mesh2schematic.pipeline import convert, write_output
from mesh2schematic.preprocess import load_mesh
from mesh2schematic.versions import resolve_data_version


def main():
    parser = argparse.ArgumentParser(
        description="Convert a 3D mesh into a Minecraft schematic or structure file"
    )

    parser.add_argument("input", type=Path, help="mesh file (.obj, .stl, .gltf, .glb, .dae, ...)")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="output path, defaults to the input name with the format's extension")
    size = parser.add_mutually_exclusive_group()
    size.add_argument("-s", "--size", type=float, default=None,
                      help="blocks along the longest axis of the model")
    size.add_argument("-S", "--scale", type=float, default=1.0,
                      help="model units per block (default 1)")
    parser.add_argument("-b", "--block", default="minecraft:stone",
                        help="block id for the shell of the model")
    parser.add_argument("-V", "--version", default="1.16",
                        help="game version (e.g. 1.16.5) or data version number")
    parser.add_argument("-f", "--format", choices=sorted(ENCODERS), default="schem")
    parser.add_argument("-r", "--rotate", type=float, nargs=3, default=(0.0, 0.0, 0.0),
                        metavar=("RX", "RY", "RZ"), help="rotation in degrees, applied X, Y, Z")
    parser.add_argument("-j", "--workers", type=int, default=1)
    parser.add_argument("--chunk-size", type=int, default=None,
                        help="split each x slice into tasks of this many y rows")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--log-file", type=Path, default=None, help="also append debug output here")

    args = parser.parse_args()
    logger = setup_logging(args.verbose, args.log_file)

    input_path = args.input.resolve()
    stem = input_path.stem

    if args.size is not None:
        resolution = TargetAxisDivisions(args.size)
    else:
        resolution = ExplicitEdgeLength(args.scale)

    config = VoxelizationConfig(
        resolution=resolution,
        rotation=tuple(math.radians(a) for a in args.rotate),
        block_id=args.block,
        data_version=resolve_data_version(args.version),
        workers=args.workers,
        chunk_size=args.chunk_size,
    )
    encoder = get_encoder(args.format)

    logger.info("Converting %s to .%s", input_path.name, encoder.file_extension())
    mesh = load_mesh(input_path)
    blob = convert(mesh, config, encoder, stem)

    out_path = args.output if args.output is not None else input_path.with_suffix("")
    written = write_output(out_path, blob, encoder)

    print(f"Done: {stem} -> {written}")


if __name__ == "__main__":
    main()
