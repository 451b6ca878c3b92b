"""Exceptions raised at the boundaries of the transformation.

The transformation itself never raises once a declaration is applicable;
these cover host lookups and configuration.
"""


class ImmutableCodegenError(Exception):
    """Base class for all errors raised by immutable_codegen."""


class SymbolResolutionError(ImmutableCodegenError, LookupError):
    """The host could not resolve a declaration to its semantic symbol."""

    def __init__(self, declaration_name: str) -> None:
        super().__init__(f"No symbol registered for declaration '{declaration_name}'")
        self.declaration_name = declaration_name


class ConfigurationError(ImmutableCodegenError, ValueError):
    """A [tool.immutable-codegen] setting has an invalid value."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for '{key}': {reason}")
        self.key = key
        self.value = value
