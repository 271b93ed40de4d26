"""Source resource loading.

Reads a translation source file into a nested string mapping (ConfigTree).
The format is chosen by file extension:

    .ini, .properties  key = value lines with optional [section] headers
    .json              nested objects

Components:
    ConfigLoader - Protocol for loading a source file (structural typing)
    FileConfigLoader - Extension-dispatching loader for ini/properties/json

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import configparser
import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from langcache.diagnostics.errors import UnsupportedFormatError
from langcache.enums import SourceFormat
from langcache.localization.types import ConfigTree

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "source_format",
]

# Keys placed before the first [section] header land in this pseudo-section.
# NUL cannot appear in a real section header written by hand.
_ROOT_SECTION = "\x00root"
_NO_DEFAULT_SECTION = "\x00default"
_QUOTES = ('"', "'")


class ConfigLoader(Protocol):
    """Protocol for reading a source resource into a ConfigTree.

    Implementations raise UnsupportedFormatError for files they cannot
    interpret and let OSError (including FileNotFoundError) propagate.

    Example:
        >>> class YamlLoader:
        ...     def load(self, path: Path) -> ConfigTree:
        ...         return yaml.safe_load(path.read_text(encoding="utf-8"))
    """

    def load(self, path: Path) -> ConfigTree:
        """Load a source resource.

        Args:
            path: Source file path

        Returns:
            Nested mapping of section/key names to strings or mappings

        Raises:
            UnsupportedFormatError: Unknown extension or unparseable content
            OSError: If the file cannot be read
        """
        ...


def source_format(path: Path) -> SourceFormat:
    """Map a file extension to a SourceFormat.

    Raises:
        UnsupportedFormatError: If the extension is not recognized
    """
    ext = path.suffix[1:]
    try:
        return SourceFormat(ext)
    except ValueError as e:
        msg = f"{ext!r} is not a valid extension for translation source '{path}'"
        raise UnsupportedFormatError(msg, path) from e


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _scalar_text(value: Any) -> str:
    match value:
        case bool():
            return "true" if value else "false"
        case None:
            return ""
        case _:
            return str(value)


def _normalize_json(node: Any) -> str | dict[str, Any]:
    """Coerce decoded JSON into a ConfigTree node.

    Arrays become mappings keyed by their indices; scalars become text.
    """
    match node:
        case Mapping():
            return {str(key): _normalize_json(value) for key, value in node.items()}
        case str():
            return node
        case Sequence():
            return {str(index): _normalize_json(value) for index, value in enumerate(node)}
        case _:
            return _scalar_text(node)


@dataclass(frozen=True, slots=True)
class FileConfigLoader:
    """Default loader for ini, properties and json sources.

    INI semantics:
        - Keys before the first section header are top-level entries
        - Each section becomes one nested mapping
        - Key case is preserved; no value interpolation
        - A value wrapped in matching single or double quotes is unquoted
        - Lines starting with ``;`` or ``#`` are comments
        - A repeated key keeps its last value

    Attributes:
        encoding: Text encoding of source files
    """

    encoding: str = "utf-8"

    def load(self, path: Path) -> ConfigTree:
        path = Path(path)
        fmt = source_format(path)
        text = path.read_text(encoding=self.encoding)

        match fmt:
            case SourceFormat.INI | SourceFormat.PROPERTIES:
                return self._parse_ini(text, path)
            case SourceFormat.JSON:
                return self._parse_json(text, path)

    @staticmethod
    def _parse_ini(text: str, path: Path) -> ConfigTree:
        parser = configparser.ConfigParser(
            interpolation=None,
            default_section=_NO_DEFAULT_SECTION,
            strict=False,
            delimiters=("=",),
            comment_prefixes=(";", "#"),
        )
        parser.optionxform = str  # type: ignore[assignment, method-assign]

        try:
            parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=str(path))
        except configparser.Error as e:
            msg = f"Cannot parse translation source '{path}': {e}"
            raise UnsupportedFormatError(msg, path) from e

        tree: dict[str, Any] = {
            key: _unquote(value) for key, value in parser.items(_ROOT_SECTION, raw=True)
        }
        for section in parser.sections():
            if section == _ROOT_SECTION:
                continue
            tree[section] = {
                key: _unquote(value) for key, value in parser.items(section, raw=True)
            }
        return tree

    @staticmethod
    def _parse_json(text: str, path: Path) -> ConfigTree:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Cannot parse translation source '{path}': {e}"
            raise UnsupportedFormatError(msg, path) from e

        if not isinstance(data, Mapping):
            msg = (
                f"Translation source '{path}' must contain a JSON object, "
                f"got {type(data).__name__}"
            )
            raise UnsupportedFormatError(msg, path)
        tree = _normalize_json(data)
        assert isinstance(tree, dict)
        return tree
