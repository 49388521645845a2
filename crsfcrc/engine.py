from __future__ import annotations

import copy
from typing import Optional, Sequence, Type, Union

from .constants import BYTE_MASK, Optimisation
from .errors import BuildConfigurationError, EngineClosedError
from .strategy import STRATEGIES, BitwiseStrategy, CRCStrategy, TableStrategy

Buffer = Union[bytes, bytearray, memoryview, Sequence[int]]


def _closed_transform(crc: int, data: int) -> int:
    raise EngineClosedError("CRC engine used after close()")


class CRCEngine:
    """CRC-8/DVB-S2 engine bound to one strategy when the subclass is defined.

    Subclasses pick their strategy with a class keyword::

        class FastCRC(CRCEngine, strategy=TableStrategy):
            pass

    Binding a strategy that has no implementation raises
    BuildConfigurationError while the class statement runs, so a misconfigured
    build never gets as far as computing a checksum.
    """

    strategy: Optional[Type[CRCStrategy]] = None

    def __init_subclass__(cls, strategy: Optional[Type[CRCStrategy]] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if strategy is None:
            return
        if not strategy.implemented:
            raise BuildConfigurationError(
                f"CRC optimisation level is set to {strategy.level.name}, "
                "but no implementation is available for it."
            )
        cls.strategy = strategy

    def __init__(self):
        if self.strategy is None:
            raise BuildConfigurationError(
                f"{type(self).__name__} is not bound to a CRC strategy; use build_engine()"
            )
        self._bind(self.strategy())

    def _bind(self, impl: Optional[CRCStrategy]) -> None:
        self._impl = impl
        self._transform = impl.transform if impl is not None else _closed_transform

    @property
    def closed(self) -> bool:
        return self._impl is None

    @property
    def level(self) -> Optimisation:
        return self.strategy.level

    @property
    def table(self) -> bytes:
        if self._impl is None:
            raise EngineClosedError("CRC engine used after close()")
        return self._impl.table()

    # -------- value semantics --------

    def __copy__(self) -> "CRCEngine":
        if self._impl is None:
            raise EngineClosedError("cannot copy a closed CRC engine")
        new = type(self).__new__(type(self))
        new._bind(copy.copy(self._impl))
        return new

    def __deepcopy__(self, memo) -> "CRCEngine":
        return self.__copy__()

    def assign(self, other: "CRCEngine") -> "CRCEngine":
        """Replace this engine's table with an independent copy of ``other``'s."""
        if other is self:
            return self
        if other.strategy is not self.strategy:
            raise TypeError(
                f"cannot assign {type(other).__name__} ({other.strategy.__name__}) "
                f"to {type(self).__name__} ({self.strategy.__name__})"
            )
        if other._impl is None:
            raise EngineClosedError("cannot assign from a closed CRC engine")
        self._bind(copy.copy(other._impl))
        return self

    def close(self) -> None:
        if self._impl is None:
            return
        self._impl.release()
        self._bind(None)

    def __enter__(self) -> "CRCEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------- checksum --------

    def calculate(self, *args) -> int:
        """Compute a checksum.

        ``calculate(start, data, length)`` seeds from ``start`` and folds the
        first ``length`` bytes of ``data``.

        ``calculate(offset, start, data, length)`` seeds from ``data[offset]``
        and folds ``data[offset + 1:length]``; ``start`` is ignored.
        """
        if len(args) == 3:
            return self.calculate_seeded(*args)
        if len(args) == 4:
            return self.calculate_offset(*args)
        raise TypeError(f"calculate() takes 3 or 4 positional arguments ({len(args)} given)")

    def calculate_seeded(self, start: int, data: Buffer, length: int) -> int:
        transform = self._transform
        crc = transform(0, start & BYTE_MASK)
        for i in range(length):
            crc = transform(crc, data[i])
        return crc

    def calculate_offset(self, offset: int, start: int, data: Buffer, length: int) -> int:
        # start is accepted for call-site symmetry only; the seed is data[offset]
        transform = self._transform
        crc = transform(0, data[offset])
        for i in range(offset + 1, length):
            crc = transform(crc, data[i])
        return crc

    def verify(self, expected: int, start: int, data: Buffer, length: int) -> bool:
        return self.calculate_seeded(start, data, length) == (expected & BYTE_MASK)


class SpeedCRC(CRCEngine, strategy=TableStrategy):
    pass


class SizeCRC(CRCEngine, strategy=BitwiseStrategy):
    pass


_ENGINES = {
    Optimisation.SPEED: SpeedCRC,
    Optimisation.SIZE: SizeCRC,
}


def build_engine(level: Optimisation) -> Type[CRCEngine]:
    level = Optimisation(level)
    engine = _ENGINES.get(level)
    if engine is None:
        # Defining the class runs the strategy check in __init_subclass__
        engine = type(f"{level.name.title()}CRC", (CRCEngine,), {}, strategy=STRATEGIES[level])
        _ENGINES[level] = engine
    return engine
