"""
Eru - composable functional control-flow primitives.

- eru.continuation: continuation monad (lift / bind)
- eru.validation: fail-fast and harvest-all validation over Result
- eru.core: Result (Ok / Err), ValidationError aggregate, settings, logging
- eru.church: Church-encoded booleans

Note that ``eru.continuation.bind`` and ``eru.core.result.bind`` are
different operations; only the Result one is re-exported here.
"""

__version__ = "0.1.0"

from eru.continuation import Continuation, as_continuation, lift
from eru.core import *  # noqa
from eru.core import __all__ as _core_all
from eru.validation import (
    Rule,
    check,
    check_chained,
    check_quick,
    check_quick_chained,
    check_quick_rule,
    check_quick_rule_chained,
    check_rule,
    check_rule_chained,
    validate,
    validate_chained,
)

__all__ = [
    "__version__",
    *_core_all,
    "Continuation",
    "lift",
    "as_continuation",
    "Rule",
    "check",
    "check_quick",
    "check_rule",
    "check_quick_rule",
    "check_chained",
    "check_quick_chained",
    "check_rule_chained",
    "check_quick_rule_chained",
    "validate",
    "validate_chained",
]
