from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Mapping, Optional

from immutable_codegen.domain.naming import property_name
from immutable_codegen.domain.symbols import NamedTypeSymbol, TypeSymbol
from immutable_codegen.domain.syntax import (
    AnyMember,
    ConstructorMember,
    Expression,
    MethodMember,
    PropertyMember,
    TypeDeclaration,
    TypeDeclarationKind,
    TypeRef,
)

if TYPE_CHECKING:
    from immutable_codegen.domain.protocols import HostDocumentProtocol


@dataclass(frozen=True)
class ParameterDescriptor:
    """One constructor parameter of the type being made immutable."""

    name: str
    declared_type: TypeRef
    is_inherited: bool = False
    is_nullable: bool = True
    default: Optional[Expression] = None

    @property
    def property_name(self) -> str:
        return property_name(self.name) or self.name


@dataclass(frozen=True)
class CollectedSignature:
    """
    Ordered parameter list of the target: inherited parameters first, then own.

    has_base_constructor is True when a single base constructor was found,
    even one without parameters; it selects base.GetHashCode() as hash seed.
    """

    parameters: tuple[ParameterDescriptor, ...] = ()
    has_base_constructor: bool = False

    @property
    def inherited(self) -> tuple[ParameterDescriptor, ...]:
        return tuple(p for p in self.parameters if p.is_inherited)

    @property
    def own(self) -> tuple[ParameterDescriptor, ...]:
        return tuple(p for p in self.parameters if not p.is_inherited)


@dataclass(frozen=True)
class MemberClassification:
    """Existing members split into regenerated and preserved ones."""

    generated_trivia: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    custom_members: tuple[AnyMember, ...] = ()


@dataclass(frozen=True)
class TargetType:
    """The declaration being transformed, joined with its semantic information."""

    name: str
    type_parameters: tuple[str, ...] = ()
    is_value_type: bool = False
    is_abstract: bool = False
    constructors: tuple[ConstructorMember, ...] = ()
    parameter_types: Mapping[str, TypeSymbol] = field(default_factory=dict)
    base_type: Optional[NamedTypeSymbol] = None

    @property
    def full_name(self) -> str:
        if self.type_parameters:
            return f"{self.name}<{', '.join(self.type_parameters)}>"
        return self.name

    @classmethod
    def from_declaration(cls, declaration: TypeDeclaration, symbol: NamedTypeSymbol) -> "TargetType":
        """Join a declaration with its declared symbol.

        Own parameter types come from the symbol's constructor when it has
        exactly one; parameters the symbol does not describe fall back to
        the nullable default in the collector.
        """
        parameter_types: dict[str, TypeSymbol] = {}
        if len(symbol.constructors) == 1:
            for parameter in symbol.constructors[0].parameters:
                parameter_types[parameter.name] = parameter.type
        is_value_type = declaration.kind is TypeDeclarationKind.STRUCT or symbol.is_value_type
        return cls(
            name=declaration.name,
            type_parameters=declaration.type_parameters,
            is_value_type=is_value_type,
            is_abstract=declaration.is_abstract,
            constructors=declaration.constructors,
            parameter_types=parameter_types,
            base_type=None if is_value_type else symbol.base_type,
        )


@dataclass(frozen=True)
class SynthesizedMembers:
    """Regenerated members. Optional methods are None when not produced."""

    properties: tuple[PropertyMember, ...]
    constructor: ConstructorMember
    clone: Optional[MethodMember] = None
    equals: Optional[MethodMember] = None
    get_hash_code: Optional[MethodMember] = None

    def ordered(self) -> tuple[AnyMember, ...]:
        """Properties, constructor, then Clone / Equals / GetHashCode."""
        methods = tuple(m for m in (self.clone, self.equals, self.get_hash_code) if m is not None)
        return (*self.properties, self.constructor, *methods)


@dataclass(frozen=True)
class RefactoringAction:
    """An action offered to the host for a selected declaration."""

    title: str
    declaration_name: str
    apply: Callable[[], Optional["HostDocumentProtocol"]]
