"""Syntax value tree for C# type declarations.

The host editing environment translates its own parse tree into these frozen
dataclasses before calling the transformation, and translates the result back.
Generated code is built from these nodes; the renderer in the infrastructure
layer is the only place that turns them into text.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class TextSpan:
    """Half-open character range [start, start + length) in a document."""

    start: int
    length: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length

    def contains(self, other: "TextSpan") -> bool:
        """True when ``other`` lies entirely inside this span."""
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class TypeRef:
    """Type syntax as written by the user. Echoed, never interpreted."""

    text: str

    def __str__(self) -> str:
        return self.text


class Modifier(Enum):
    """Declaration modifiers, in the order C# writes them."""

    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PRIVATE = "private"
    STATIC = "static"
    ABSTRACT = "abstract"
    SEALED = "sealed"
    VIRTUAL = "virtual"
    OVERRIDE = "override"
    READONLY = "readonly"
    PARTIAL = "partial"


class AccessorKind(Enum):
    GET = "get"
    SET = "set"
    INIT = "init"


class TypeDeclarationKind(Enum):
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    RECORD = "record"
    ENUM = "enum"


# Expressions


@dataclass(frozen=True)
class IdentifierName:
    name: str


@dataclass(frozen=True)
class Literal:
    """Numeric or keyword literal, e.g. ``23`` or ``false``."""

    text: str


@dataclass(frozen=True)
class NullLiteral:
    pass


@dataclass(frozen=True)
class BaseReference:
    """The ``base`` keyword."""


@dataclass(frozen=True)
class MemberAccess:
    expression: "Expression"
    name: str


@dataclass(frozen=True)
class Invocation:
    expression: "Expression"
    arguments: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class ObjectCreation:
    type: TypeRef
    arguments: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class CastExpression:
    type: TypeRef
    expression: "Expression"


@dataclass(frozen=True)
class BinaryExpression:
    operator: str
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class Conditional:
    condition: "Expression"
    when_true: "Expression"
    when_false: "Expression"


@dataclass(frozen=True)
class Parenthesized:
    expression: "Expression"


Expression = Union[
    IdentifierName,
    Literal,
    NullLiteral,
    BaseReference,
    MemberAccess,
    Invocation,
    ObjectCreation,
    CastExpression,
    BinaryExpression,
    Conditional,
    Parenthesized,
]


# Statements


@dataclass(frozen=True)
class RawStatement:
    """Statement text supplied by the host for a hand-written body."""

    text: str


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression


@dataclass(frozen=True)
class AssignmentStatement:
    target: Expression
    value: Expression


@dataclass(frozen=True)
class ReturnStatement:
    expression: Optional[Expression] = None


@dataclass(frozen=True)
class IfStatement:
    condition: Expression
    statement: "Statement"


@dataclass(frozen=True)
class LocalDeclaration:
    type: TypeRef
    name: str
    value: Expression


@dataclass(frozen=True)
class Block:
    statements: tuple["Statement", ...] = ()


@dataclass(frozen=True)
class UncheckedBlock:
    """``unchecked { ... }``: integer arithmetic wraps instead of throwing."""

    block: Block


Statement = Union[
    RawStatement,
    ExpressionStatement,
    AssignmentStatement,
    ReturnStatement,
    IfStatement,
    LocalDeclaration,
    Block,
    UncheckedBlock,
]


# Members


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeRef
    default: Optional[Expression] = None


@dataclass(frozen=True)
class Accessor:
    kind: AccessorKind
    body: Optional[Block] = None
    expression_body: Optional[Expression] = None
    modifiers: tuple[Modifier, ...] = ()

    @property
    def has_body(self) -> bool:
        return self.body is not None or self.expression_body is not None


@dataclass(frozen=True, kw_only=True)
class Member:
    """Common shape of every member declaration."""

    modifiers: tuple[Modifier, ...] = ()
    leading_trivia: tuple[str, ...] = ()

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers


@dataclass(frozen=True, kw_only=True)
class PropertyMember(Member):
    name: str
    type: TypeRef
    accessors: tuple[Accessor, ...] = ()
    expression_body: Optional[Expression] = None

    def accessor(self, kind: AccessorKind) -> Optional[Accessor]:
        for accessor in self.accessors:
            if accessor.kind is kind:
                return accessor
        return None

    @property
    def getter(self) -> Optional[Accessor]:
        return self.accessor(AccessorKind.GET)

    @property
    def setter(self) -> Optional[Accessor]:
        return self.accessor(AccessorKind.SET) or self.accessor(AccessorKind.INIT)


@dataclass(frozen=True)
class ConstructorInitializer:
    """``: base(...)`` or ``: this(...)``."""

    keyword: str
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ConstructorMember(Member):
    name: str
    parameters: tuple[Parameter, ...] = ()
    initializer: Optional[ConstructorInitializer] = None
    body: Block = field(default_factory=Block)


@dataclass(frozen=True, kw_only=True)
class MethodMember(Member):
    name: str
    return_type: TypeRef
    parameters: tuple[Parameter, ...] = ()
    body: Optional[Block] = None
    expression_body: Optional[Expression] = None


@dataclass(frozen=True, kw_only=True)
class OtherMember(Member):
    """Fields, events, indexers, operators: carried through as host text."""

    kind: str
    text: str


@dataclass(frozen=True, kw_only=True)
class TypeDeclaration(Member):
    kind: TypeDeclarationKind
    name: str
    type_parameters: tuple[str, ...] = ()
    base_list: tuple[TypeRef, ...] = ()
    members: tuple["AnyMember", ...] = ()
    span: Optional[TextSpan] = None

    @property
    def is_abstract(self) -> bool:
        return Modifier.ABSTRACT in self.modifiers

    @property
    def full_name(self) -> str:
        """Name with its generic parameter list, e.g. ``Pair<TLeft, TRight>``."""
        if self.type_parameters:
            return f"{self.name}<{', '.join(self.type_parameters)}>"
        return self.name

    @property
    def constructors(self) -> tuple[ConstructorMember, ...]:
        return tuple(m for m in self.members if isinstance(m, ConstructorMember))

    def with_members(self, members: "tuple[AnyMember, ...] | list[AnyMember]") -> "TypeDeclaration":
        return replace(self, members=tuple(members))


AnyMember = Union[PropertyMember, ConstructorMember, MethodMember, OtherMember, TypeDeclaration]


@dataclass(frozen=True)
class UsingDirective:
    name: str


@dataclass(frozen=True)
class CompilationUnit:
    """Root of a document: usings, an optional file-scoped namespace, types."""

    usings: tuple[UsingDirective, ...] = ()
    members: tuple[TypeDeclaration, ...] = ()
    namespace: Optional[str] = None

    def has_using(self, name: str) -> bool:
        return any(u.name == name for u in self.usings)

    def add_using(self, name: str) -> "CompilationUnit":
        return replace(self, usings=self.usings + (UsingDirective(name),))

    def iter_type_declarations(self) -> "list[TypeDeclaration]":
        """All type declarations, outer before nested."""
        found: list[TypeDeclaration] = []
        pending = list(self.members)
        while pending:
            decl = pending.pop(0)
            found.append(decl)
            pending[0:0] = [m for m in decl.members if isinstance(m, TypeDeclaration)]
        return found

    def replace_node(self, old: TypeDeclaration, new: TypeDeclaration) -> "CompilationUnit":
        """Swap ``old`` (matched by identity) for ``new`` anywhere in the tree."""
        return replace(self, members=tuple(_replace_in(m, old, new) for m in self.members))


def _replace_in(decl: TypeDeclaration, old: TypeDeclaration, new: TypeDeclaration) -> TypeDeclaration:
    if decl is old:
        return new
    nested = [m for m in decl.members if isinstance(m, TypeDeclaration)]
    if not nested:
        return decl
    members = tuple(
        _replace_in(m, old, new) if isinstance(m, TypeDeclaration) else m
        for m in decl.members
    )
    return decl.with_members(members)
