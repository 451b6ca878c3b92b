"""Load [tool.immutable-codegen] and [tool] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

from immutable_codegen.domain.constants import CONFIG_SECTION

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml."""

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> tuple[dict[str, object], dict[str, object]]:
        """Walk up from ``start`` (default CWD). Returns (config_dict, tool_section)."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except OSError:
                logger.warning("Could not read %s; using defaults.", config_file)
                return (empty, empty)
            except toml_lib.TOMLDecodeError:
                logger.warning("Malformed TOML in %s; using defaults.", config_file)
                return (empty, empty)
            tool_section = data.get("tool", {}) or {}
            config_dict = tool_section.get(CONFIG_SECTION, {}) or {}
            logger.debug("Loaded [tool.%s] from %s", CONFIG_SECTION, config_file)
            return (config_dict, tool_section)
        return (empty, empty)
