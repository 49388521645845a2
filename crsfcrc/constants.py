from enum import IntEnum


# CRC-8/DVB-S2 generator: x^8 + x^7 + x^6 + x^4 + x^2 + 1
CRC_8_DVB_S2_POLY = 0xD5

BYTE_MASK = 0xFF
HIGH_BIT = 0x80
TABLE_SIZE = 256


class Optimisation(IntEnum):
    SPEED = 0     # 256-byte lookup table
    SIZE = 1      # bit-by-bit, no table
    HARDWARE = 2  # CRC peripheral; no implementation


# Build setting: which strategy GenericCRC is bound to when the package is imported.
CRC_OPTIMISATION_LEVEL = Optimisation.SPEED
