"""
CRC-8/DVB-S2 update strategies.

Each strategy provides ``transform(crc, byte)``: fold one input byte into a
running 8-bit checksum. ``TableStrategy`` trades 256 bytes of memory for a
single lookup per byte; ``BitwiseStrategy`` recomputes the eight polynomial
rounds every time. Both produce identical results for every input.
"""

from __future__ import annotations

from typing import Optional

from .constants import BYTE_MASK, CRC_8_DVB_S2_POLY, HIGH_BIT, TABLE_SIZE, Optimisation


def crc_8_dvb_s2(crc: int, data: int) -> int:
    crc ^= data
    for _ in range(8):
        if crc & HIGH_BIT:
            crc = ((crc << 1) ^ CRC_8_DVB_S2_POLY) & BYTE_MASK
        else:
            crc = (crc << 1) & BYTE_MASK
    return crc


def build_table() -> bytearray:
    """Return the 256-entry table; entry ``i`` is ``crc_8_dvb_s2(0, i)``."""
    return bytearray(crc_8_dvb_s2(0, i) for i in range(TABLE_SIZE))


class CRCStrategy:
    level: Optimisation
    implemented = True

    def transform(self, crc: int, data: int) -> int:
        raise NotImplementedError

    def table(self) -> bytes:
        return bytes(build_table())

    def release(self) -> None:
        pass

    def __copy__(self) -> "CRCStrategy":
        return type(self)()

    def __deepcopy__(self, memo) -> "CRCStrategy":
        return self.__copy__()


class TableStrategy(CRCStrategy):
    level = Optimisation.SPEED

    def __init__(self, table: Optional[bytearray] = None):
        # Always owned: a caller-supplied table is copied, never aliased
        self._table: Optional[bytearray] = build_table() if table is None else bytearray(table)
        if len(self._table) != TABLE_SIZE:
            raise ValueError(f"lookup table must have {TABLE_SIZE} entries, got {len(self._table)}")

    def transform(self, crc: int, data: int) -> int:
        return self._table[crc ^ data]

    def table(self) -> bytes:
        return bytes(self._table)

    def release(self) -> None:
        self._table = None

    def __copy__(self) -> "TableStrategy":
        return TableStrategy(self._table)


class BitwiseStrategy(CRCStrategy):
    level = Optimisation.SIZE

    def transform(self, crc: int, data: int) -> int:
        return crc_8_dvb_s2(crc, data)


class HardwareStrategy(CRCStrategy):
    # No CRC peripheral driver exists; engines refuse to bind this strategy.
    level = Optimisation.HARDWARE
    implemented = False

    def transform(self, crc: int, data: int) -> int:
        raise NotImplementedError("no hardware CRC implementation is available")


STRATEGIES = {
    Optimisation.SPEED: TableStrategy,
    Optimisation.SIZE: BitwiseStrategy,
    Optimisation.HARDWARE: HardwareStrategy,
}
