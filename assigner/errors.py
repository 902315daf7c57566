"""
Exceptions raised by the assignment model.
Solver outcomes (unsatisfiable / unknown) are statuses, not exceptions.
"""


class AssignerError(Exception):
    """Base class for every error raised by the assigner package."""


class MalformedInput(AssignerError):
    """Input document is missing required fields or carries wrong types."""


class SolverSetupError(AssignerError):
    """The solver backend rejected a variable or constraint declaration."""


class PrematureEvaluation(AssignerError):
    """A model was read before satisfiability was confirmed, or has no value for a variable."""
