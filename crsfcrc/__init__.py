"""
crsfcrc: CRC-8/DVB-S2 engine for validating serial receiver frames.

The engine folds a byte buffer into one checksum byte using polynomial 0xD5.
Two interchangeable strategies are provided:

- SPEED: 256-byte lookup table built once per engine instance
- SIZE: bit-by-bit polynomial rounds, no table

The strategy is chosen by ``constants.CRC_OPTIMISATION_LEVEL`` when the package
is imported; ``GenericCRC`` is the engine class bound to it. Selecting the
HARDWARE level fails the import with BuildConfigurationError.
"""

from .constants import CRC_OPTIMISATION_LEVEL, CRC_8_DVB_S2_POLY, Optimisation
from .engine import CRCEngine, SizeCRC, SpeedCRC, build_engine
from .errors import BuildConfigurationError, CRCError, EngineClosedError

__version__ = "0.1"

GenericCRC = build_engine(CRC_OPTIMISATION_LEVEL)

__all__ = [
    "GenericCRC",
    "CRCEngine",
    "SpeedCRC",
    "SizeCRC",
    "build_engine",
    "Optimisation",
    "CRC_OPTIMISATION_LEVEL",
    "CRC_8_DVB_S2_POLY",
    "CRCError",
    "BuildConfigurationError",
    "EngineClosedError",
]
