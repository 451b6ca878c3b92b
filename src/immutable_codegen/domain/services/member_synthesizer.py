"""Member Synthesizer: builds the regenerated members as syntax nodes."""

import logging
from collections.abc import Mapping, Sequence
from functools import reduce
from typing import Optional

from immutable_codegen.domain.config import CodegenConfig
from immutable_codegen.domain.constants import (
    CLONE_METHOD,
    EQUALS_CAST_LOCAL,
    EQUALS_METHOD,
    EQUALS_PARAMETER,
    GET_HASH_CODE_METHOD,
    HASH_LOCAL,
    HASH_MULTIPLIER,
    HASH_SEED,
    OVERRIDE_HAS_VALUE,
    OVERRIDE_VALUE,
)
from immutable_codegen.domain.entities import (
    CollectedSignature,
    ParameterDescriptor,
    SynthesizedMembers,
    TargetType,
)
from immutable_codegen.domain.syntax import (
    Accessor,
    AccessorKind,
    AssignmentStatement,
    BaseReference,
    BinaryExpression,
    Block,
    CastExpression,
    Conditional,
    ConstructorInitializer,
    ConstructorMember,
    Expression,
    IdentifierName,
    IfStatement,
    Invocation,
    Literal,
    LocalDeclaration,
    MemberAccess,
    MethodMember,
    Modifier,
    NullLiteral,
    ObjectCreation,
    Parameter,
    Parenthesized,
    PropertyMember,
    ReturnStatement,
    TypeRef,
    UncheckedBlock,
)

logger = logging.getLogger(__name__)

_PUBLIC: tuple[Modifier, ...] = (Modifier.PUBLIC,)
_PUBLIC_OVERRIDE: tuple[Modifier, ...] = (Modifier.PUBLIC, Modifier.OVERRIDE)


class MemberSynthesizer:
    """Produces properties, constructor, Clone, Equals and GetHashCode from a signature."""

    def __init__(self, config: Optional[CodegenConfig] = None) -> None:
        self.config = config or CodegenConfig()

    def synthesize(
        self,
        signature: CollectedSignature,
        target: TargetType,
        generated_trivia: Optional[Mapping[str, tuple[str, ...]]] = None,
    ) -> SynthesizedMembers:
        trivia = generated_trivia or {}
        parameters = signature.parameters
        own = signature.own

        members = SynthesizedMembers(
            properties=tuple(self.create_property(p, trivia) for p in own),
            constructor=self.create_constructor(signature, target),
            clone=None if target.is_abstract else self.create_clone_method(target.full_name, parameters),
            equals=self.create_equals_method(target.full_name, parameters) if parameters else None,
            get_hash_code=(
                self.create_get_hash_code_method(signature.has_base_constructor, own) if own else None
            ),
        )
        logger.debug(
            "Synthesized %d properties for %s (clone=%s, equals=%s, hash=%s)",
            len(members.properties),
            target.full_name,
            members.clone is not None,
            members.equals is not None,
            members.get_hash_code is not None,
        )
        return members

    def create_property(
        self, parameter: ParameterDescriptor, trivia: Mapping[str, tuple[str, ...]]
    ) -> PropertyMember:
        """Public getter-only auto-property, keeping any captured leading trivia."""
        name = parameter.property_name
        return PropertyMember(
            name=name,
            type=parameter.declared_type,
            accessors=(Accessor(AccessorKind.GET),),
            modifiers=_PUBLIC,
            leading_trivia=trivia.get(name, ()),
        )

    def create_constructor(self, signature: CollectedSignature, target: TargetType) -> ConstructorMember:
        """
        Assign own parameters; chain inherited ones to base(...) for classes.

        Without inherited parameters the existing initializer (``base(...)`` or
        ``this(...)``) is kept as written.
        """
        existing = target.constructors[0] if target.constructors else None
        body = Block(
            tuple(
                AssignmentStatement(IdentifierName(p.property_name), IdentifierName(p.name))
                for p in signature.own
            )
        )
        initializer = existing.initializer if existing else None
        if signature.inherited and not target.is_value_type:
            initializer = ConstructorInitializer(
                "base", tuple(IdentifierName(p.name) for p in signature.inherited)
            )
        return ConstructorMember(
            name=target.name,
            parameters=tuple(Parameter(p.name, p.declared_type, p.default) for p in signature.parameters),
            initializer=initializer,
            body=body,
            modifiers=existing.modifiers if existing and existing.modifiers else _PUBLIC,
            leading_trivia=existing.leading_trivia if existing else (),
        )

    def override_wrapper_type(self, declared_type: TypeRef) -> TypeRef:
        """``Param<T>?``: absent by default, present when the caller passes a value."""
        return TypeRef(f"{self.config.override_type}<{declared_type}>?")

    def create_clone_method(self, type_name: str, parameters: Sequence[ParameterDescriptor]) -> MethodMember:
        """Clone(Param<A>? a = null, ...) => new T(a.HasValue ? a.Value.Value : A, ...)."""
        arguments: list[Expression] = []
        for p in parameters:
            argument = IdentifierName(p.name)
            arguments.append(
                Conditional(
                    condition=MemberAccess(argument, OVERRIDE_HAS_VALUE),
                    when_true=MemberAccess(MemberAccess(argument, OVERRIDE_VALUE), OVERRIDE_VALUE),
                    when_false=IdentifierName(p.property_name),
                )
            )
        return MethodMember(
            name=CLONE_METHOD,
            return_type=TypeRef(type_name),
            parameters=tuple(
                Parameter(p.name, self.override_wrapper_type(p.declared_type), NullLiteral())
                for p in parameters
            ),
            body=Block((ReturnStatement(ObjectCreation(TypeRef(type_name), tuple(arguments))),)),
            modifiers=_PUBLIC,
        )

    def create_equals_method(self, type_name: str, parameters: Sequence[ParameterDescriptor]) -> MethodMember:
        """Null / runtime-type guard, cast, then Equals(P, o.P) && ... in declaration order."""
        obj = IdentifierName(EQUALS_PARAMETER)
        other = IdentifierName(EQUALS_CAST_LOCAL)
        guard = BinaryExpression(
            "||",
            BinaryExpression("==", obj, NullLiteral()),
            BinaryExpression(
                "!=",
                Invocation(IdentifierName("GetType")),
                Invocation(MemberAccess(obj, "GetType")),
            ),
        )
        comparisons: list[Expression] = [
            Invocation(
                IdentifierName(EQUALS_METHOD),
                (IdentifierName(p.property_name), MemberAccess(other, p.property_name)),
            )
            for p in parameters
        ]
        combined = reduce(lambda left, right: BinaryExpression("&&", left, right), comparisons)
        return MethodMember(
            name=EQUALS_METHOD,
            return_type=TypeRef("bool"),
            parameters=(Parameter(EQUALS_PARAMETER, TypeRef("object")),),
            body=Block(
                (
                    IfStatement(guard, ReturnStatement(Literal("false"))),
                    LocalDeclaration(TypeRef("var"), EQUALS_CAST_LOCAL, CastExpression(TypeRef(type_name), obj)),
                    ReturnStatement(combined),
                )
            ),
            modifiers=_PUBLIC_OVERRIDE,
        )

    def create_get_hash_code_method(
        self, has_base_constructor: bool, own: Sequence[ParameterDescriptor]
    ) -> MethodMember:
        """
        hash = seed; hash = hash * 37 + h(P) for each own parameter, in an unchecked block.

        Inherited parameters enter through base.GetHashCode() as the seed.
        """
        hash_name = IdentifierName(HASH_LOCAL)
        seed: Expression = (
            Invocation(MemberAccess(BaseReference(), GET_HASH_CODE_METHOD))
            if has_base_constructor
            else Literal(str(HASH_SEED))
        )
        statements: list = [LocalDeclaration(TypeRef("int"), HASH_LOCAL, seed)]
        for p in own:
            statements.append(
                AssignmentStatement(
                    hash_name,
                    BinaryExpression(
                        "+",
                        BinaryExpression("*", hash_name, Literal(str(HASH_MULTIPLIER))),
                        self.property_hash(p),
                    ),
                )
            )
        statements.append(ReturnStatement(hash_name))
        return MethodMember(
            name=GET_HASH_CODE_METHOD,
            return_type=TypeRef("int"),
            body=Block((UncheckedBlock(Block(tuple(statements))),)),
            modifiers=_PUBLIC_OVERRIDE,
        )

    @staticmethod
    def property_hash(parameter: ParameterDescriptor) -> Expression:
        """P.GetHashCode(), guarded to 0 for null when the type is nullable."""
        prop = IdentifierName(parameter.property_name)
        call = Invocation(MemberAccess(prop, GET_HASH_CODE_METHOD))
        if not parameter.is_nullable:
            return call
        return Parenthesized(Conditional(BinaryExpression("!=", prop, NullLiteral()), call, Literal("0")))
