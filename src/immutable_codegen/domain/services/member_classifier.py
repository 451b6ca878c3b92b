"""Member Classifier: which existing members are regenerated and which are kept."""

from collections.abc import Iterable

from immutable_codegen.domain.constants import GENERATED_METHOD_NAMES
from immutable_codegen.domain.entities import MemberClassification
from immutable_codegen.domain.syntax import (
    AnyMember,
    ConstructorMember,
    MethodMember,
    Modifier,
    PropertyMember,
)


class MemberClassifier:
    """Partitions a member list into generated and custom members."""

    def classify(self, members: Iterable[AnyMember]) -> MemberClassification:
        """
        Collect custom members in their original order, and the leading trivia
        of generated properties keyed by property name.
        """
        generated_trivia: dict[str, tuple[str, ...]] = {}
        custom: list[AnyMember] = []
        for member in members:
            if isinstance(member, PropertyMember):
                if self.is_property_custom(member):
                    custom.append(member)
                elif member.leading_trivia:
                    generated_trivia[member.name] = member.leading_trivia
            elif isinstance(member, MethodMember):
                if self.is_method_custom(member):
                    custom.append(member)
            elif isinstance(member, ConstructorMember):
                # rebuilt from the collected signature
                continue
            else:
                custom.append(member)
        return MemberClassification(generated_trivia=generated_trivia, custom_members=tuple(custom))

    @staticmethod
    def is_property_custom(prop: PropertyMember) -> bool:
        """Expression-bodied, static, abstract, or a bodied getter without a setter."""
        if prop.expression_body is not None:
            return True
        if prop.has_modifier(Modifier.STATIC) or prop.has_modifier(Modifier.ABSTRACT):
            return True
        getter = prop.getter
        return getter is not None and getter.has_body and prop.setter is None

    @staticmethod
    def is_method_custom(method: MethodMember) -> bool:
        return method.name not in GENERATED_METHOD_NAMES
