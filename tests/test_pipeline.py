import nbtlib
import trimesh

from mesh2schematic import ExplicitEdgeLength, TargetAxisDivisions, VoxelizationConfig, convert, write_output
from mesh2schematic.export import SchematicEncoder, StructureEncoder
from mesh2schematic.export.varint import decode_varints
from mesh2schematic.preprocess.io import TriangleMesh
from mesh2schematic.preprocess.voxelize import voxelize


def test_unit_square_to_structure(unit_square):
    cfg = VoxelizationConfig(resolution=ExplicitEdgeLength(1.0), block_id="minecraft:gold_block", data_version=2586)
    blob = convert(unit_square, cfg, StructureEncoder(), "square")

    assert blob["size"] == [2, 2, 1]
    assert len(blob["blocks"]) == 4
    assert {tuple(b["pos"]) for b in blob["blocks"]} == {(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)}
    assert blob["palette"][0]["Name"] == "minecraft:gold_block"


def test_unit_square_to_schematic(unit_square):
    cfg = VoxelizationConfig(resolution=ExplicitEdgeLength(0.5))
    blob = convert(unit_square, cfg, SchematicEncoder(), "square")

    w, h, l = blob["Width"], blob["Height"], blob["Length"]
    assert (w, h, l) == (3, 3, 1)
    assert len(blob["BlockData"]) == w * h * l
    assert sum(decode_varints(blob["BlockData"])) == 9


def test_block_count_matches_grid():
    mesh = TriangleMesh.from_trimesh(trimesh.creation.icosphere(subdivisions=1))
    cfg = VoxelizationConfig(resolution=TargetAxisDivisions(6), rotation=(0.1, 0.2, 0.3))

    grid = voxelize(mesh, cfg).grid
    blob = convert(mesh, cfg, StructureEncoder(), "ball")
    assert len(blob["blocks"]) == grid.count()

    blob = convert(mesh, cfg, SchematicEncoder(), "ball")
    assert sum(decode_varints(blob["BlockData"])) == grid.count()


def test_write_output(tmp_path, unit_square):
    encoder = SchematicEncoder(clock=lambda: 42)
    cfg = VoxelizationConfig(resolution=ExplicitEdgeLength(1.0))
    blob = convert(unit_square, cfg, encoder, "square")

    out = write_output(tmp_path / "square", blob, encoder)
    assert out == tmp_path / "square.schem"
    nbt_file = nbtlib.load(out)
    assert nbt_file.root_name == "Schematic"
    assert nbt_file.snbt() == blob.snbt()
    assert nbt_file["Metadata"]["Date"] == 42
    assert decode_varints(nbt_file["BlockData"]) == decode_varints(blob["BlockData"])
