"""Configuration for the generated code. Immutable value objects created by Infrastructure."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from immutable_codegen.domain.constants import (
    DEFAULT_INDENT_SIZE,
    DEFAULT_NEWLINE,
    DEFAULT_OVERRIDE_NAMESPACE,
    DEFAULT_OVERRIDE_TYPE,
    DEFAULT_REFACTORING_TITLE,
)
from immutable_codegen.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_NAMESPACE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_NEWLINES = ("\n", "\r\n")


@dataclass(frozen=True)
class CodegenConfig:
    """Settings that shape generated members and rendered text."""

    override_namespace: str = DEFAULT_OVERRIDE_NAMESPACE
    override_type: str = DEFAULT_OVERRIDE_TYPE
    refactoring_title: str = DEFAULT_REFACTORING_TITLE
    indent_size: int = DEFAULT_INDENT_SIZE
    newline: str = DEFAULT_NEWLINE


class ConfigurationLoader:
    """
    Validated view of the [tool.immutable-codegen] table.

    Domain does not read the filesystem; Infrastructure calls
    ConfigFileLoader.load_config_from_fs() and constructs
    ConfigurationLoader(config_dict, tool_section) at the composition root.
    """

    def __init__(
        self,
        config_dict: dict[str, object],
        tool_section: dict[str, object] | None = None,
    ) -> None:
        self._config = config_dict
        self._tool_section = tool_section or {}
        if config_dict:
            self.validate_config(config_dict)
        self._codegen = CodegenConfig(
            override_namespace=str(self._config.get("override_namespace", DEFAULT_OVERRIDE_NAMESPACE)),
            override_type=str(self._config.get("override_type", DEFAULT_OVERRIDE_TYPE)),
            refactoring_title=str(self._config.get("refactoring_title", DEFAULT_REFACTORING_TITLE)),
            indent_size=int(self._config.get("indent_size", DEFAULT_INDENT_SIZE)),  # type: ignore[call-overload]
            newline=str(self._config.get("newline", DEFAULT_NEWLINE)),
        )

    def validate_config(self, config: dict[str, object]) -> None:
        """Reject values that would produce uncompilable output."""
        namespace = config.get("override_namespace", DEFAULT_OVERRIDE_NAMESPACE)
        if not isinstance(namespace, str) or not _NAMESPACE.match(namespace):
            raise ConfigurationError("override_namespace", namespace, "expected a dotted C# namespace")

        override_type = config.get("override_type", DEFAULT_OVERRIDE_TYPE)
        if not isinstance(override_type, str) or not _IDENTIFIER.match(override_type):
            raise ConfigurationError("override_type", override_type, "expected a C# identifier")

        title = config.get("refactoring_title", DEFAULT_REFACTORING_TITLE)
        if not isinstance(title, str) or not title.strip():
            raise ConfigurationError("refactoring_title", title, "expected a non-empty string")

        indent = config.get("indent_size", DEFAULT_INDENT_SIZE)
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
            raise ConfigurationError("indent_size", indent, "expected a non-negative integer")

        newline = config.get("newline", DEFAULT_NEWLINE)
        if newline not in _NEWLINES:
            raise ConfigurationError("newline", newline, "expected '\\n' or '\\r\\n'")

        known = {"override_namespace", "override_type", "refactoring_title", "indent_size", "newline"}
        for key in sorted(set(config) - known):
            logger.warning("Configuration Warning: unknown key '%s' in [tool.immutable-codegen] ignored.", key)

    @property
    def config(self) -> dict[str, object]:
        """Return the raw loaded configuration."""
        return self._config

    @property
    def codegen(self) -> CodegenConfig:
        return self._codegen
