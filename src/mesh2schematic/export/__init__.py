from typing import Dict, Type

from ..errors import ConfigError
from .base import Encoder
from .schematic import SchematicEncoder
from .structure import StructureEncoder
from .varint import decode_varints, encode_varint, encode_varints

ENCODERS: Dict[str, Type[Encoder]] = {
    "schem": SchematicEncoder,
    "nbt": StructureEncoder,
}


def get_encoder(fmt: str) -> Encoder:
    try:
        return ENCODERS[fmt.lower()]()
    except KeyError:
        raise ConfigError(f"Unknown output format '{fmt}' (choose from {', '.join(ENCODERS)})") from None


__all__ = [
    "ENCODERS",
    "Encoder",
    "SchematicEncoder",
    "StructureEncoder",
    "get_encoder",
    "decode_varints",
    "encode_varint",
    "encode_varints",
]
