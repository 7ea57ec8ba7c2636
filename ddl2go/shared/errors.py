"""Exceptions raised while generating Go structs."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base error; ``source_path`` names the DDL or config file involved."""

    def __init__(self, message: str, source_path: str | None = None) -> None:
        self.source_path = source_path
        super().__init__(f"{source_path}: {message}" if source_path else message)


class TypeMappingError(GeneratorError):
    """A column type keyword has no Go counterpart."""

    def __init__(
        self,
        type_name: str,
        context: str,
        source_path: str | None = None,
    ) -> None:
        self.type_name = type_name
        super().__init__(f"unsupported column type '{type_name}' in {context}", source_path)


class ConfigError(GeneratorError):
    """An option in the config file or on the command line is invalid."""

    def __init__(
        self,
        message: str,
        source_path: str | None = None,
        key: str | None = None,
    ) -> None:
        self.key = key
        super().__init__(f"option '{key}': {message}" if key else message, source_path)
