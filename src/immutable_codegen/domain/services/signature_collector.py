"""Signature Collector: the ordered parameter list of a target type."""

import logging
from typing import Optional

from immutable_codegen.domain.entities import CollectedSignature, ParameterDescriptor, TargetType
from immutable_codegen.domain.services.nullability import can_type_be_null
from immutable_codegen.domain.symbols import NamedTypeSymbol, SpecialType
from immutable_codegen.domain.syntax import TypeRef

logger = logging.getLogger(__name__)


class SignatureCollector:
    """Combines base constructor parameters with the type's own constructor parameters."""

    def collect(self, target: TargetType) -> Optional[CollectedSignature]:
        """
        Return inherited parameters followed by own ones, or None when not applicable.

        Not applicable: zero or several constructors, or no parameters at all
        and no eligible base constructor.
        """
        if len(target.constructors) != 1:
            logger.debug("%s has %d constructors; not applicable", target.name, len(target.constructors))
            return None
        constructor = target.constructors[0]

        inherited = self.collect_base_parameters(target)
        has_base_constructor = inherited is not None
        inherited = inherited or ()

        if not constructor.parameters and not has_base_constructor:
            logger.debug("%s has no constructor parameters and no base constructor", target.name)
            return None

        inherited_names = {p.name for p in inherited}
        own: list[ParameterDescriptor] = []
        for parameter in constructor.parameters:
            if parameter.name in inherited_names:
                continue
            type_symbol = target.parameter_types.get(parameter.name)
            own.append(
                ParameterDescriptor(
                    name=parameter.name,
                    declared_type=parameter.type,
                    is_inherited=False,
                    is_nullable=True if type_symbol is None else can_type_be_null(type_symbol),
                    default=parameter.default,
                )
            )

        return CollectedSignature(
            parameters=(*inherited, *own),
            has_base_constructor=has_base_constructor,
        )

    def collect_base_parameters(self, target: TargetType) -> Optional[tuple[ParameterDescriptor, ...]]:
        """Parameters of the base type's only constructor; None when there is none to chain to."""
        if target.is_value_type:
            return None
        base_type = target.base_type
        if base_type is None or not self.is_eligible_base(base_type):
            return None
        return tuple(
            ParameterDescriptor(
                name=p.name,
                declared_type=TypeRef(p.type.display),
                is_inherited=True,
                is_nullable=can_type_be_null(p.type),
            )
            for p in base_type.constructors[0].parameters
        )

    @staticmethod
    def is_eligible_base(base_type: Optional[NamedTypeSymbol]) -> bool:
        """Not object, and exactly one constructor (several would be ambiguous)."""
        if base_type is None or base_type.special_type is SpecialType.SYSTEM_OBJECT:
            return False
        if len(base_type.constructors) != 1:
            logger.debug(
                "Base type %s has %d constructors; inheriting nothing",
                base_type.name,
                len(base_type.constructors),
            )
            return False
        return True
