"""Semantic model value types supplied by the host alongside the syntax tree."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TypeKind(Enum):
    CLASS = "class"
    STRUCT = "struct"
    ENUM = "enum"
    INTERFACE = "interface"
    DELEGATE = "delegate"
    ARRAY = "array"
    TYPE_PARAMETER = "type_parameter"
    POINTER = "pointer"
    DYNAMIC = "dynamic"
    ERROR = "error"


# Kinds the host reports as named types (as opposed to arrays, pointers, type parameters).
NAMED_TYPE_KINDS: frozenset[TypeKind] = frozenset(
    {TypeKind.CLASS, TypeKind.STRUCT, TypeKind.ENUM, TypeKind.INTERFACE, TypeKind.DELEGATE}
)


class SpecialType(Enum):
    NONE = "none"
    SYSTEM_OBJECT = "System.Object"
    SYSTEM_NULLABLE_T = "System.Nullable<T>"


@dataclass(frozen=True)
class TypeSymbol:
    """Resolved type of a parameter."""

    display: str
    kind: TypeKind
    special_type: SpecialType = SpecialType.NONE
    constructed_from: SpecialType = SpecialType.NONE
    is_reference_type: bool = False

    @property
    def is_named(self) -> bool:
        return self.kind in NAMED_TYPE_KINDS

    @classmethod
    def reference(cls, display: str) -> "TypeSymbol":
        return cls(display=display, kind=TypeKind.CLASS, is_reference_type=True)

    @classmethod
    def value(cls, display: str) -> "TypeSymbol":
        return cls(display=display, kind=TypeKind.STRUCT)

    @classmethod
    def nullable(cls, underlying: str) -> "TypeSymbol":
        """``Nullable<T>``, written ``T?`` for a value type ``T``."""
        return cls(
            display=f"{underlying}?",
            kind=TypeKind.STRUCT,
            constructed_from=SpecialType.SYSTEM_NULLABLE_T,
        )

    @classmethod
    def enum(cls, display: str) -> "TypeSymbol":
        return cls(display=display, kind=TypeKind.ENUM)

    @classmethod
    def type_parameter(cls, name: str, reference_constrained: bool = False) -> "TypeSymbol":
        return cls(display=name, kind=TypeKind.TYPE_PARAMETER, is_reference_type=reference_constrained)

    @classmethod
    def array(cls, element: str) -> "TypeSymbol":
        return cls(display=f"{element}[]", kind=TypeKind.ARRAY, is_reference_type=True)


@dataclass(frozen=True)
class ParameterSymbol:
    name: str
    type: TypeSymbol


@dataclass(frozen=True)
class MethodSymbol:
    """A constructor as the semantic model sees it: just its parameters."""

    parameters: tuple[ParameterSymbol, ...] = ()


@dataclass(frozen=True)
class NamedTypeSymbol:
    """Declared symbol of a class or struct, with its base type chain."""

    name: str
    kind: TypeKind = TypeKind.CLASS
    base_type: Optional["NamedTypeSymbol"] = None
    constructors: tuple[MethodSymbol, ...] = field(default_factory=tuple)
    special_type: SpecialType = SpecialType.NONE

    @property
    def is_value_type(self) -> bool:
        return self.kind in (TypeKind.STRUCT, TypeKind.ENUM)

    @classmethod
    def system_object(cls) -> "NamedTypeSymbol":
        return cls(
            name="object",
            kind=TypeKind.CLASS,
            constructors=(MethodSymbol(),),
            special_type=SpecialType.SYSTEM_OBJECT,
        )
