"""
Struct Code Generator - Generates Go model structs from MySQL DDL.

Each CREATE TABLE statement in the input becomes one Go source file holding:
- A struct with one field per column, in column order
- gorm and json tags carrying the original column name
- A TableName() accessor returning the original table name

Files are written under <cwd>/[output/][database/]<StructName>.go and then
passed to the Go formatter.
"""

from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..shared import (
    ColumnDef,
    GeneratorConfig,
    GeneratorError,
    TableDef,
    TypeMappingError,
    extract_tables,
    go_string_literal,
    read_ddl,
    resolve_config,
    to_camel_first_upper,
)
from ..shared.config_loader import DEFAULT_FORMATTER


class GoType(str, Enum):
    """Go types a column can map to."""

    INT64 = "int64"
    INT = "int"
    STRING = "string"
    BYTES = "[]byte"
    FLOAT64 = "float64"
    UINT64 = "uint64"
    TIME = "time.Time"


# Type mappings from MySQL type keywords to Go types
DEFAULT_GO_TYPES: Final[dict[str, GoType]] = {
    "bigint": GoType.INT64,
    "int": GoType.INT,
    "smallint": GoType.INT,
    "tinyint": GoType.INT,
    "char": GoType.STRING,
    "varchar": GoType.STRING,
    "text": GoType.STRING,
    "mediumtext": GoType.STRING,
    "longtext": GoType.STRING,
    "blob": GoType.BYTES,
    "float": GoType.FLOAT64,
    "double": GoType.FLOAT64,
    "decimal": GoType.FLOAT64,
    "bit": GoType.UINT64,
    "date": GoType.TIME,
    "datetime": GoType.TIME,
    "timestamp": GoType.TIME,
}

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class Column:
    """Represents a database column with Go type information."""

    name: str
    field_name: str
    go_type: GoType
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class Table:
    """A table ready to be rendered as a Go struct."""

    name: str
    struct_name: str
    columns: tuple[Column, ...]


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    """A Go source file written for one table."""

    table_name: str
    struct_name: str
    path: Path


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self._struct_template = self.template_env.get_template("struct.go.j2")

    @property
    def struct_template(self):
        return self._struct_template


def go_type_for(
    type_name: str,
    context: str,
    source_path: str | None = None,
) -> GoType:
    """Resolve the Go type for a MySQL type keyword.

    Raises:
        TypeMappingError: If no type mapping exists.
    """
    mapped = DEFAULT_GO_TYPES.get(type_name)
    if mapped is None:
        raise TypeMappingError(type_name, context, source_path)
    return mapped


def build_column(column_def: ColumnDef, source_path: str | None = None) -> Column:
    return Column(
        name=column_def.name,
        field_name=to_camel_first_upper(column_def.name),
        go_type=go_type_for(
            column_def.type_name,
            f"column '{column_def.name}'",
            source_path,
        ),
        comment=column_def.comment,
    )


def build_table(table_def: TableDef, source_path: str | None = None) -> Table:
    """Map every column of a parsed table, keeping column order."""
    return Table(
        name=table_def.name,
        struct_name=to_camel_first_upper(table_def.name),
        columns=tuple(build_column(c, source_path) for c in table_def.columns),
    )


def needs_time_import(table: Table) -> bool:
    return any(col.go_type is GoType.TIME for col in table.columns)


def field_line(column: Column) -> str:
    """Render one struct field declaration with its tags."""
    line = (
        f"{column.field_name} {column.go_type.value} "
        f'`gorm:"Column:{column.name}" json:"{column.name}"`'
    )
    comment = " ".join(column.comment.splitlines()) if column.comment else ""
    if comment:
        return f"{line} // {comment}"
    return line


def render_table(table: Table, package: str, ctx: GeneratorContext) -> str:
    return ctx.struct_template.render(
        package=package,
        needs_time=needs_time_import(table),
        struct_name=table.struct_name,
        table_name_literal=go_string_literal(table.name),
        fields=[field_line(col) for col in table.columns],
    )


def output_path(struct_name: str, config: GeneratorConfig, cwd: Path) -> Path:
    """Compute <cwd>/[output/][database/]<StructName>.go."""
    path = cwd
    if config.output:
        path = path / config.output
    if config.database:
        path = path / config.database
    return path / f"{struct_name}.go"


def format_file(path: Path, command: Sequence[str] = DEFAULT_FORMATTER) -> bool:
    """Run the formatter on a written file.

    Failures are reported and swallowed; the unformatted file is kept.
    """
    resolved_cmd = [*command, str(path)]
    # On Windows, resolve the executable path to handle .cmd/.bat files
    if sys.platform == "win32":
        resolved = shutil.which(resolved_cmd[0])
        if resolved:
            resolved_cmd[0] = resolved
    try:
        subprocess.run(
            resolved_cmd,
            check=True,
            capture_output=True,
            text=True,
            env=os.environ.copy(),
        )
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"{' '.join(command)} failed: {e}")
        return False
    return True


def write_table(
    table: Table,
    config: GeneratorConfig,
    ctx: GeneratorContext,
    cwd: Path,
) -> GeneratedFile:
    path = output_path(table.struct_name, config, cwd)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_table(table, config.package_name, ctx), encoding="utf-8")
    print(path)

    if config.format:
        format_file(path, config.formatter)

    return GeneratedFile(table_name=table.name, struct_name=table.struct_name, path=path)


def generate(
    sql_path: Path,
    config: GeneratorConfig | None = None,
    cwd: Path | None = None,
) -> list[GeneratedFile]:
    """Generate one Go file per CREATE TABLE statement in ``sql_path``.

    Args:
        sql_path: DDL file to read.
        config: Resolved settings; defaults apply when omitted.
        cwd: Base directory for output paths; the process cwd when omitted.

    Returns:
        The written files, in source order.

    Raises:
        TypeMappingError: If a column type is unmapped and strict_types is set.
        GeneratorError: If the DDL file cannot be read.
        OSError: If a directory or file cannot be written.
    """
    config = config or GeneratorConfig()
    cwd = Path.cwd() if cwd is None else cwd
    ctx = GeneratorContext()

    generated: list[GeneratedFile] = []
    for table_def in extract_tables(read_ddl(sql_path)):
        try:
            table = build_table(table_def, str(sql_path))
        except TypeMappingError as e:
            if config.strict_types:
                raise
            print(f"Warning: skipping table '{table_def.name}': {e}")
            continue
        generated.append(write_table(table, config, ctx, cwd))

    return generated


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate Go model structs from MySQL CREATE TABLE statements",
    )
    parser.add_argument(
        "sql_file",
        type=Path,
        help="File containing CREATE TABLE statements",
    )
    parser.add_argument(
        "-d",
        "--database",
        default=None,
        help="Database name, used as output sub-directory (default: model)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory, relative to the current directory",
    )
    parser.add_argument(
        "-p",
        "--package",
        default=None,
        help="Go package name (default: the database name)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML file with generator settings",
    )
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Do not run the formatter on generated files",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip tables with unmapped column types instead of aborting",
    )

    args = parser.parse_args(argv)

    try:
        config = resolve_config(
            args.config,
            {
                "database": args.database,
                "output": args.output,
                "package": args.package,
                "format": False if args.no_format else None,
                "strict_types": False if args.lenient else None,
            },
        )
        generated = generate(args.sql_file, config)
    except TypeMappingError as e:
        raise SystemExit(f"Error: {e}") from e
    except (GeneratorError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Generated {len(generated)} struct file(s) from {args.sql_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
