"""Dead code elimination passes and the pass driver."""

from .dse import eliminate_dead_stores, eliminate_dead_stores_in_function
from .dve import eliminate_dead_variables, eliminate_dead_variables_worklist
from .pipeline import DEFAULT_PASSES, PASSES, optimize_function, optimize_program

__all__ = [
    "DEFAULT_PASSES",
    "PASSES",
    "eliminate_dead_stores",
    "eliminate_dead_stores_in_function",
    "eliminate_dead_variables",
    "eliminate_dead_variables_worklist",
    "optimize_function",
    "optimize_program",
]
