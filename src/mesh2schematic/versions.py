from __future__ import annotations
import logging
import re
from typing import Dict, Tuple

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Release name -> data version (Java Edition).
DATA_VERSIONS: Dict[str, int] = {
    "1.12.2": 1343,
    "1.13": 1519,
    "1.13.1": 1628,
    "1.13.2": 1631,
    "1.14": 1952,
    "1.14.1": 1957,
    "1.14.2": 1963,
    "1.14.3": 1968,
    "1.14.4": 1976,
    "1.15": 2225,
    "1.15.1": 2227,
    "1.15.2": 2230,
    "1.16": 2566,
    "1.16.1": 2567,
    "1.16.2": 2578,
    "1.16.3": 2580,
    "1.16.4": 2584,
    "1.16.5": 2586,
    "1.17": 2724,
    "1.17.1": 2730,
    "1.18": 2860,
    "1.18.1": 2865,
    "1.18.2": 2975,
    "1.19": 3105,
    "1.19.1": 3117,
    "1.19.2": 3120,
    "1.19.3": 3218,
    "1.19.4": 3337,
    "1.20": 3463,
    "1.20.1": 3465,
    "1.20.2": 3578,
    "1.20.4": 3700,
    "1.20.6": 3839,
    "1.21": 3953,
    "1.21.1": 3955,
}

# First data version with namespaced block states.
FLATTENING_DATA_VERSION = 1519


def _key(name: str) -> Tuple[int, ...]:
    return tuple(int(p) for p in name.split("."))


def resolve_data_version(text: str) -> int:
    """
    "2586" -> 2586, "1.16" -> 2566, "Java 1.16.5" -> 2586. A release line with no
    entry of its own resolves to its newest listed patch: "1.12" -> 1343 (1.12.2).
    """
    s = str(text).strip()
    if re.fullmatch(r"\d+", s):
        value = int(s)
    else:
        s = re.sub(r"^(java( edition)?)\s+", "", s, flags=re.IGNORECASE)
        if s in DATA_VERSIONS:
            value = DATA_VERSIONS[s]
        else:
            line = [name for name in DATA_VERSIONS if name.startswith(s + ".")]
            if not line or not re.fullmatch(r"\d+(\.\d+)*", s):
                raise ConfigError(f"Unknown game version: {text!r}")
            value = DATA_VERSIONS[max(line, key=_key)]

    if value < FLATTENING_DATA_VERSION:
        logger.warning(
            "Data version %d predates %d; the written palette uses namespaced block ids",
            value, FLATTENING_DATA_VERSION,
        )
    return value
