class QuoridorError(Exception):
    """Base class for every error raised by the engine"""


class ValidationError(QuoridorError, ValueError):
    """Malformed state, move or request. Raised before any work is done."""


class StructuralInconsistency(QuoridorError):
    """A player lost every path to its goal row.

    Wall legality checks make this unreachable; if it ever shows up the state
    is corrupt and must not be played on.
    """


class ComputeFailure(QuoridorError):
    """The search failed inside the compute boundary"""


class SearchAlreadyPending(QuoridorError):
    """A search for this game has been submitted and has not finished yet"""
