"""Parameter name to property name mapping."""

from typing import Optional


def property_name(parameter_name: Optional[str]) -> Optional[str]:
    """Uppercase the first character: ``firstName`` -> ``FirstName``.

    Empty and missing names come back unchanged. Every other module maps
    parameters to properties through this function only.
    """
    if not parameter_name:
        return parameter_name
    return parameter_name[0].upper() + parameter_name[1:]
