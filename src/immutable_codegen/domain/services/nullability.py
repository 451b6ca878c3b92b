"""Decide whether a parameter's type can hold null."""

from immutable_codegen.domain.symbols import SpecialType, TypeKind, TypeSymbol


def can_type_be_null(type_symbol: TypeSymbol) -> bool:
    """
    Structs only as Nullable<T>, enums never, other named types always.

    Type parameters are nullable only when constrained to reference types;
    arrays, pointers and anything unresolved count as nullable.
    """
    if type_symbol.is_named:
        if type_symbol.kind is TypeKind.STRUCT:
            return type_symbol.constructed_from is SpecialType.SYSTEM_NULLABLE_T
        if type_symbol.kind is TypeKind.ENUM:
            return False
        return True
    if type_symbol.kind is TypeKind.TYPE_PARAMETER:
        return type_symbol.is_reference_type
    return True
