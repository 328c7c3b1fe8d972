"""
Core numeric domain: error model, kinds registry, formats and primitives.

This module contains the building blocks that every numeric family is
built on: tagged results, kind descriptors and word/bit arithmetic.
"""
