"""Shared builders for declarations, symbols and documents.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
on the import path.
"""

from collections.abc import Callable, Sequence
from typing import Optional

import pytest

from immutable_codegen.domain.config import CodegenConfig
from immutable_codegen.domain.symbols import (
    MethodSymbol,
    NamedTypeSymbol,
    ParameterSymbol,
    TypeKind,
    TypeSymbol,
)
from immutable_codegen.domain.syntax import (
    AnyMember,
    Block,
    CompilationUnit,
    ConstructorMember,
    Modifier,
    Parameter,
    TextSpan,
    TypeDeclaration,
    TypeDeclarationKind,
    TypeRef,
    UsingDirective,
)
from immutable_codegen.infrastructure.gateways.csharp_renderer import CSharpSourceRenderer
from immutable_codegen.infrastructure.gateways.in_memory_host import InMemoryDocument

ParamEntry = tuple[str, TypeSymbol]


def build_constructor(name: str, params: Sequence[ParamEntry]) -> ConstructorMember:
    """``public Name(T1 p1, ...) { }`` with an empty body."""
    return ConstructorMember(
        name=name,
        parameters=tuple(Parameter(p, TypeRef(t.display)) for p, t in params),
        body=Block(),
        modifiers=(Modifier.PUBLIC,),
    )


def build_symbol(
    name: str,
    params: Sequence[ParamEntry],
    base_type: Optional[NamedTypeSymbol] = None,
    is_struct: bool = False,
) -> NamedTypeSymbol:
    return NamedTypeSymbol(
        name=name,
        kind=TypeKind.STRUCT if is_struct else TypeKind.CLASS,
        base_type=None if is_struct else (base_type or NamedTypeSymbol.system_object()),
        constructors=(MethodSymbol(tuple(ParameterSymbol(p, t) for p, t in params)),),
    )


def build_declaration(
    name: str,
    params: Sequence[ParamEntry],
    members: Sequence[AnyMember] = (),
    kind: TypeDeclarationKind = TypeDeclarationKind.CLASS,
    modifiers: tuple[Modifier, ...] = (Modifier.PUBLIC,),
    base_list: Sequence[str] = (),
    type_parameters: Sequence[str] = (),
    span: Optional[TextSpan] = None,
) -> TypeDeclaration:
    """Declaration with ``members`` followed by its constructor."""
    return TypeDeclaration(
        kind=kind,
        name=name,
        type_parameters=tuple(type_parameters),
        base_list=tuple(TypeRef(b) for b in base_list),
        members=(*members, build_constructor(name, params)),
        modifiers=modifiers,
        span=span,
    )


@pytest.fixture
def int_type() -> TypeSymbol:
    return TypeSymbol.value("int")


@pytest.fixture
def string_type() -> TypeSymbol:
    return TypeSymbol.reference("string")


@pytest.fixture
def make_declaration() -> Callable[..., TypeDeclaration]:
    return build_declaration


@pytest.fixture
def make_symbol() -> Callable[..., NamedTypeSymbol]:
    return build_symbol


@pytest.fixture
def make_constructor() -> Callable[..., ConstructorMember]:
    return build_constructor


@pytest.fixture
def renderer() -> CSharpSourceRenderer:
    return CSharpSourceRenderer(CodegenConfig())


@pytest.fixture
def make_document(renderer: CSharpSourceRenderer) -> Callable[..., InMemoryDocument]:
    def _make(
        *declarations: TypeDeclaration,
        symbols: Sequence[NamedTypeSymbol] = (),
        usings: Sequence[str] = (),
    ) -> InMemoryDocument:
        root = CompilationUnit(
            usings=tuple(UsingDirective(u) for u in usings),
            members=tuple(declarations),
        )
        return InMemoryDocument(root, {s.name: s for s in symbols}, renderer)

    return _make
