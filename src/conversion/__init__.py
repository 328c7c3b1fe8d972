"""
Conversion — единый протокол конверсий между числовыми kind.
"""

from src.conversion.protocol import convert, range_checked, rule_for

__all__ = [
    "convert",
    "range_checked",
    "rule_for",
]
