"""
Names and numbers baked into the generated code.
"""

CLONE_METHOD: str = "Clone"
EQUALS_METHOD: str = "Equals"
GET_HASH_CODE_METHOD: str = "GetHashCode"

# Methods with these exact names are always regenerated.
GENERATED_METHOD_NAMES: frozenset[str] = frozenset(
    {CLONE_METHOD, EQUALS_METHOD, GET_HASH_CODE_METHOD}
)

HASH_SEED: int = 23
HASH_MULTIPLIER: int = 37
HASH_LOCAL: str = "hash"

EQUALS_PARAMETER: str = "obj"
EQUALS_CAST_LOCAL: str = "o"

# Override wrapper: Clone(Param<int>? a = null) unwraps as a.HasValue ? a.Value.Value : A
DEFAULT_OVERRIDE_NAMESPACE: str = "Righthand.Immutable"
DEFAULT_OVERRIDE_TYPE: str = "Param"
OVERRIDE_HAS_VALUE: str = "HasValue"
OVERRIDE_VALUE: str = "Value"

DEFAULT_REFACTORING_TITLE: str = "Implement immutable type"
DEFAULT_INDENT_SIZE: int = 4
DEFAULT_NEWLINE: str = "\n"

CONFIG_SECTION: str = "immutable-codegen"
