"""
Shared enums for the eru package.

Enums in this module are part of the public API and are re-exported from
``eru.core``; they should not be owned by any single implementation module.

STDLIB ONLY - NO PYDANTIC.
"""

from enum import Enum


class ReductionStrategy(str, Enum):
    """
    How a validation engine reduces an ordered list of rules to one outcome.

    Used by: eru.validation (dispatch in validate() / validate_chained()).
    """

    # Stop at the first failing rule and report only its error
    FAIL_FAST = "fail_fast"

    # Evaluate every rule and concatenate every failing rule's messages
    HARVEST_ALL = "harvest_all"


__all__ = [
    "ReductionStrategy",
]
