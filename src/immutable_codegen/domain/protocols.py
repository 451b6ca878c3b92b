from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from immutable_codegen.domain.symbols import NamedTypeSymbol
    from immutable_codegen.domain.syntax import CompilationUnit, TextSpan, TypeDeclaration


class SemanticModelProtocol(Protocol):
    """Resolved type information for one document."""

    def get_declared_symbol(self, declaration: "TypeDeclaration") -> "NamedTypeSymbol":
        """Resolve a type declaration, including its base type and that type's constructors."""
        ...


class HostDocumentProtocol(Protocol):
    """A document under edit in the host environment."""

    def get_syntax_root(self) -> "CompilationUnit":
        ...

    def get_semantic_model(self) -> SemanticModelProtocol:
        ...

    def find_declaration_at(self, span: "TextSpan") -> Optional["TypeDeclaration"]:
        """Innermost type declaration covering the selection, if any."""
        ...

    def with_syntax_root(self, root: "CompilationUnit") -> "HostDocumentProtocol":
        """Return a new document with ``root``; the receiver is unchanged."""
        ...


class SourceRendererProtocol(Protocol):
    """Turns the value tree into source text."""

    def render(self, root: "CompilationUnit") -> str:
        ...
