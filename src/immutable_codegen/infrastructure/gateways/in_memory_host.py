"""In-memory host adapter - implements HostDocumentProtocol over the value tree."""

from collections.abc import Mapping
from typing import Optional

from immutable_codegen.domain.errors import SymbolResolutionError
from immutable_codegen.domain.protocols import (
    HostDocumentProtocol,
    SemanticModelProtocol,
    SourceRendererProtocol,
)
from immutable_codegen.domain.symbols import NamedTypeSymbol
from immutable_codegen.domain.syntax import CompilationUnit, TextSpan, TypeDeclaration


class InMemorySemanticModel(SemanticModelProtocol):
    """Declared symbols keyed by declaration name."""

    def __init__(self, symbols: Mapping[str, NamedTypeSymbol]) -> None:
        self._symbols = dict(symbols)

    def get_declared_symbol(self, declaration: TypeDeclaration) -> NamedTypeSymbol:
        try:
            return self._symbols[declaration.name]
        except KeyError:
            raise SymbolResolutionError(declaration.name) from None


class InMemoryDocument(HostDocumentProtocol):
    """A document whose syntax root and semantic model are already resolved."""

    def __init__(
        self,
        root: CompilationUnit,
        symbols: Mapping[str, NamedTypeSymbol],
        renderer: Optional[SourceRendererProtocol] = None,
    ) -> None:
        self._root = root
        self._symbols = dict(symbols)
        self._semantic_model = InMemorySemanticModel(self._symbols)
        self._renderer = renderer

    def get_syntax_root(self) -> CompilationUnit:
        return self._root

    def get_semantic_model(self) -> SemanticModelProtocol:
        return self._semantic_model

    def find_declaration_at(self, span: TextSpan) -> Optional[TypeDeclaration]:
        """Innermost declaration whose span covers ``span``."""
        found: Optional[TypeDeclaration] = None
        for decl in self._root.iter_type_declarations():
            if decl.span is None or not decl.span.contains(span):
                continue
            if found is None or found.span is None or found.span.contains(decl.span):
                found = decl
        return found

    def find_declaration(self, name: str) -> Optional[TypeDeclaration]:
        """First declaration named ``name``, outer before nested."""
        for decl in self._root.iter_type_declarations():
            if decl.name == name:
                return decl
        return None

    def with_syntax_root(self, root: CompilationUnit) -> "InMemoryDocument":
        return InMemoryDocument(root, self._symbols, self._renderer)

    def get_text(self) -> str:
        """Source text of the current root. Requires a renderer."""
        if self._renderer is None:
            raise RuntimeError("InMemoryDocument was created without a renderer")
        return self._renderer.render(self._root)
