from pathlib import Path
from typing import Any, Optional

from immutable_codegen.domain.config import CodegenConfig, ConfigurationLoader
from immutable_codegen.infrastructure.config_file_loader import ConfigFileLoader
from immutable_codegen.infrastructure.gateways.csharp_renderer import CSharpSourceRenderer
from immutable_codegen.use_cases.implement_immutable_type import ImplementImmutableTypeUseCase


class ImmutableCodegenContainer:
    """Dependency Injection Container for immutable_codegen."""

    _instance: Optional["ImmutableCodegenContainer"] = None

    def __init__(self, start: Optional[Path] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(start)

    def _register_defaults(self, start: Optional[Path]) -> None:
        """Register default implementations for protocols."""
        config_dict, tool_section = ConfigFileLoader.load_config_from_fs(start)
        config_loader = ConfigurationLoader(config_dict, tool_section)
        self.register_singleton("ConfigurationLoader", config_loader)
        codegen: CodegenConfig = config_loader.codegen
        self.register_singleton("CodegenConfig", codegen)
        self.register_singleton("SourceRenderer", CSharpSourceRenderer(codegen))
        self.register_singleton("ImplementImmutableTypeUseCase", ImplementImmutableTypeUseCase(codegen))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    @classmethod
    def get_instance(cls) -> "ImmutableCodegenContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = ImmutableCodegenContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
