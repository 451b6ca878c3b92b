"""Synthesize immutable-value boilerplate for C# class and struct declarations."""

from immutable_codegen.domain.config import CodegenConfig
from immutable_codegen.domain.naming import property_name
from immutable_codegen.use_cases.implement_immutable_type import ImplementImmutableTypeUseCase

__all__ = ["CodegenConfig", "ImplementImmutableTypeUseCase", "property_name"]

__version__ = "0.1.0"
