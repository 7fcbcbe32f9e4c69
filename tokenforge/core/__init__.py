"""TokenForge Core - Shared constants, errors and validators.

Import specific names from submodules:
    from tokenforge.core.constants import Category, ErrorCode
    from tokenforge.core.errors import StructuralError, TokenWarning
    from tokenforge.core.validators import ValidationError
"""

from tokenforge.core import constants, errors, validators

__all__ = [
    "constants",
    "errors",
    "validators",
]
