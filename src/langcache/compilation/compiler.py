"""Translation compiler: ConfigTree -> flat table -> cached artifact.

Flattens nested source mappings into a single key -> string table, joining
section names and keys with a configurable separator, and serializes the
result into the text form stored in the cache directory.

Artifact format (JSON, UTF-8):
    {
      "format": 1,
      "compiler": "<compiler hash>",
      "language": "<language code>",
      "strings": {"<key>": "<value>", ...}
    }

Key order in "strings" follows the traversal order of the source, so the
same ConfigTree and separator always serialize to identical text. Staleness
is judged by timestamps only, never by content.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import hashlib
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from langcache.constants import (
    ARTIFACT_FORMAT_VERSION,
    COMPILER_HASH_LENGTH,
    DEFAULT_SECTION_SEPARATOR,
)
from langcache.core.identifiers import is_valid_key
from langcache.diagnostics.errors import (
    ArtifactLoadError,
    InvalidKeyError,
    TranslationFormatError,
    UnknownKeyError,
)
from langcache.localization.types import ConfigTree, FlatTable, LanguageCode

__all__ = [
    "CompiledArtifact",
    "TranslationCompiler",
    "compiler_hash",
]

# A printf-style conversion or a literal %%.
# Each "*" width or precision consumes an argument of its own.
_CONVERSION_PATTERN = re.compile(
    r"%(?:%|[-#0 +]*(\*|\d+)?(?:\.(\*|\d*))?[hlL]?[diouxXeEfFgGcrsa])"
)


def _argument_count(template: str) -> int:
    """Number of positional arguments a %-style template consumes."""
    count = 0
    for match in _CONVERSION_PATTERN.finditer(template):
        if match.group(0) == "%%":
            continue
        count += 1 + match.groups().count("*")
    return count


@functools.cache
def compiler_hash() -> str:
    """Content hash of this module's source.

    Part of every artifact path, so deployments running a different compiler
    never pick up each other's artifacts from a shared cache directory.

    Returns:
        First COMPILER_HASH_LENGTH hex digits of the SHA-256 of this file
    """
    digest = hashlib.sha256(Path(__file__).read_bytes()).hexdigest()
    return digest[:COMPILER_HASH_LENGTH]


@dataclass(frozen=True, slots=True)
class CompiledArtifact:
    """Compiled translation table for one language.

    Attributes:
        language: Language code the table was compiled for
        compiler: Hash of the compiler that produced the table
        strings: Read-only flat key -> string table
    """

    language: LanguageCode
    compiler: str
    strings: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.strings, MappingProxyType):
            object.__setattr__(self, "strings", MappingProxyType(dict(self.strings)))

    def __contains__(self, key: object) -> bool:
        return key in self.strings

    def __len__(self) -> int:
        return len(self.strings)

    def translate(self, key: str, args: tuple[Any, ...] = ()) -> str:
        """Look up a key, optionally substituting positional arguments.

        Args:
            key: Fully-qualified translation key
            args: Values for ``%s``/``%d`` style placeholders, in order.
                Empty means the stored string is returned unmodified.
                Arguments beyond those the template consumes are ignored.

        Returns:
            The translated string

        Raises:
            UnknownKeyError: If key is not in the table
            TranslationFormatError: If too few args are given or one does
                not fit its placeholder
        """
        try:
            template = self.strings[key]
        except KeyError:
            raise UnknownKeyError(key, self.language) from None

        if not args:
            return template
        try:
            return template % tuple(args[: _argument_count(template)])
        except (TypeError, ValueError) as e:
            raise TranslationFormatError(key, str(e)) from e


@dataclass(frozen=True, slots=True)
class TranslationCompiler:
    """Flattens ConfigTrees and (de)serializes compiled artifacts.

    Attributes:
        section_separator: String joining a section name and a key

    Example:
        >>> compiler = TranslationCompiler()
        >>> compiler.compile({"greeting": "Hi", "welcomepage": {"greeting": "Welcome"}})
        {'greeting': 'Hi', 'welcomepage_greeting': 'Welcome'}
    """

    section_separator: str = DEFAULT_SECTION_SEPARATOR

    @staticmethod
    def validate(key: str) -> bool:
        """Check whether a flattened key is a legal identifier."""
        return is_valid_key(key)

    def compile(self, config: ConfigTree) -> FlatTable:
        """Flatten a ConfigTree into a key -> string table.

        Args:
            config: Nested mapping from the loader (or a merge of two)

        Returns:
            Flat table in traversal order

        Raises:
            InvalidKeyError: On the first key that is not a valid identifier,
                or that two source entries flatten to (``a_b`` at the top
                level and ``b`` in section ``a``). Nothing is returned for
                the language in that case.
        """
        table: FlatTable = {}
        self._flatten(config, "", table)
        return table

    def _flatten(self, node: ConfigTree, prefix: str, table: FlatTable) -> None:
        for key, value in node.items():
            if isinstance(value, Mapping):
                self._flatten(value, f"{prefix}{key}{self.section_separator}", table)
                continue
            full_name = f"{prefix}{key}"
            if not self.validate(full_name):
                raise InvalidKeyError(full_name)
            if full_name in table:
                raise InvalidKeyError(full_name, "it is defined more than once")
            table[full_name] = value if isinstance(value, str) else str(value)

    def build(self, language: LanguageCode, config: ConfigTree) -> CompiledArtifact:
        """Compile a ConfigTree into an artifact stamped with the compiler hash."""
        return CompiledArtifact(
            language=language,
            compiler=compiler_hash(),
            strings=self.compile(config),
        )

    @staticmethod
    def serialize(artifact: CompiledArtifact) -> str:
        """Render an artifact as the text stored in the cache."""
        document = {
            "format": ARTIFACT_FORMAT_VERSION,
            "compiler": artifact.compiler,
            "language": artifact.language,
            "strings": dict(artifact.strings),
        }
        return json.dumps(document, ensure_ascii=False, indent=2) + "\n"

    @staticmethod
    def deserialize(text: str, path: Path | str = "<string>") -> CompiledArtifact:
        """Parse artifact text produced by :meth:`serialize`.

        Args:
            text: Artifact file content
            path: Artifact location, for error messages

        Raises:
            ArtifactLoadError: If the text is not a well-formed artifact
        """
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Compiled artifact '{path}' is not valid JSON: {e}"
            raise ArtifactLoadError(msg, path) from e

        match document:
            case {
                "format": int(fmt),
                "compiler": str(compiler),
                "language": str(language),
                "strings": dict(strings),
            } if fmt == ARTIFACT_FORMAT_VERSION:
                pass
            case _:
                msg = f"Compiled artifact '{path}' has an unrecognized layout"
                raise ArtifactLoadError(msg, path)

        if not all(isinstance(value, str) for value in strings.values()):
            msg = f"Compiled artifact '{path}' contains non-string values"
            raise ArtifactLoadError(msg, path)

        return CompiledArtifact(language=language, compiler=compiler, strings=strings)
