"""Struct Code Generator - Generates Go model structs from MySQL DDL."""

from .main import (
    Column,
    Table,
    GoType,
    GeneratedFile,
    GeneratorContext,
    generate,
    main,
    DEFAULT_GO_TYPES,
)

__all__ = [
    "Column",
    "Table",
    "GoType",
    "GeneratedFile",
    "GeneratorContext",
    "generate",
    "main",
    "DEFAULT_GO_TYPES",
]
