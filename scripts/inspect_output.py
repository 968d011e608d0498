import argparse
from pathlib import Path

import nbtlib


def main():
    ap = argparse.ArgumentParser(description="List the top-level fields of a .schem / .nbt file")
    ap.add_argument("path", type=Path)
    args = ap.parse_args()

    nbt_file = nbtlib.load(args.path)
    print(f"root: {nbt_file.root_name!r}")
    for key, value in nbt_file.items():
        extra = f" [{len(value)}]" if isinstance(value, (nbtlib.List, nbtlib.ByteArray)) else ""
        print(f"{key}: {type(value).__name__}{extra}")


if __name__ == "__main__":
    main()
