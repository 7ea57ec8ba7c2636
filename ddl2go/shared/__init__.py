"""Shared utilities for the generator."""

from .config_loader import (
    GeneratorConfig,
    load_config,
    resolve_config,
)
from .ddl_reader import (
    ColumnDef,
    TableDef,
    extract_tables,
    parse_create_table,
    read_ddl,
    split_statements,
)
from .naming import (
    go_string_literal,
    to_camel_first_upper,
    unquote_identifier,
    unquote_string,
)
from .errors import (
    GeneratorError,
    TypeMappingError,
    ConfigError,
)

__all__ = [
    # Configuration
    "GeneratorConfig",
    "load_config",
    "resolve_config",
    # DDL extraction
    "ColumnDef",
    "TableDef",
    "extract_tables",
    "parse_create_table",
    "read_ddl",
    "split_statements",
    # Naming utilities
    "go_string_literal",
    "to_camel_first_upper",
    "unquote_identifier",
    "unquote_string",
    # Errors
    "GeneratorError",
    "TypeMappingError",
    "ConfigError",
]
