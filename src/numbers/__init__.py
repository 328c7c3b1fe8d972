"""
Numbers — значения числовых kind

Каждое семейство реализует именованные операции (value | Failure)
и Python-операторы поверх них.
"""

from src.numbers.bigint import BigInt, intn, uintn
from src.numbers.binary_float import BinaryFloat, float16, float32, float64
from src.numbers.char import Char
from src.numbers.decimal_float import DecimalFloat, dec32, dec64, dec128
from src.numbers.fixed import SMALL_VALUE_KINDS, FixedInt
from src.numbers.literals import FPLiteral, IntLiteral, parse_fp_literal, parse_int_literal
from src.numbers.wide import WideInt

__all__ = [
    # Integers
    "FixedInt",
    "SMALL_VALUE_KINDS",
    "WideInt",
    "BigInt",
    "intn",
    "uintn",
    # Literals
    "IntLiteral",
    "FPLiteral",
    "parse_int_literal",
    "parse_fp_literal",
    # Floats
    "BinaryFloat",
    "float16",
    "float32",
    "float64",
    "DecimalFloat",
    "dec32",
    "dec64",
    "dec128",
    # Code point
    "Char",
]
