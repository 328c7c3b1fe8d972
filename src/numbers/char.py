"""
Char — целевой kind кодовой точки Unicode

Значение — кодовая точка в [0, 0x10FFFF]. Char не участвует в арифметике:
это цель и источник конверсий (integer → Char, Char → integer).
"""

from dataclasses import dataclass
from typing import Any

from src.core.domain.kinds import CHAR, CODE_POINT_MAX, NumericKind
from src.core.domain.outcome import Failure, illegal_argument, overflow


@dataclass(frozen=True, order=True)
class Char:
    """
    Кодовая точка.

    Attributes:
        value: Кодовая точка в [0, 0x10FFFF]
    """

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= CODE_POINT_MAX:
            raise ValueError(f"{self.value} is not a code point")

    @property
    def kind(self) -> NumericKind:
        return CHAR

    @classmethod
    def of(cls, value: int) -> "Char | Failure":
        """Кодовая точка; значение вне [0, 0x10FFFF] → Overflow."""
        if not 0 <= value <= CODE_POINT_MAX:
            return overflow(f"{value} is out of range for {CHAR.name}")
        return cls(value)

    @classmethod
    def from_str(cls, text: str) -> "Char | Failure":
        """Char из строки ровно из одного символа."""
        if len(text) != 1:
            return illegal_argument(f"Expected a single character, got {len(text)}")
        return cls(ord(text))

    def to_int(self) -> int:
        return self.value

    def to_string(self) -> str:
        return chr(self.value)

    def __str__(self) -> str:
        return chr(self.value)

    def __int__(self) -> int:
        return self.value

    def convert_to(self, target: NumericKind, truncate: bool = False) -> Any:
        from src.conversion.protocol import convert

        return convert(self, target, truncate=truncate)
