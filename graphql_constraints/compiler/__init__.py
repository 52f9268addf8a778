"""Compiler package - schema-build-time extraction and merging of constraints."""

from ..constraint_map import EMPTY_CONSTRAINTS, ConstraintMap, merge_constraint_maps
from .compiler import CompiledIndex, ConstraintCompiler, compile_constraints
from .extractor import ConstraintExtractor, list_chain_length, list_depth

__all__ = [
    "CompiledIndex",
    "ConstraintCompiler",
    "ConstraintExtractor",
    "ConstraintMap",
    "EMPTY_CONSTRAINTS",
    "compile_constraints",
    "list_chain_length",
    "list_depth",
    "merge_constraint_maps",
]
