"""FSSearch Core - Shared constants, errors and validators.

Import specific names from submodules:
    from fssearch.core.constants import SearchTarget
    from fssearch.core.validators import SearchError
"""

from fssearch.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
