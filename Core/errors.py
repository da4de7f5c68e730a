"""Error taxonomy shared by the subset-sum solvers and their CLI shell."""


class SubsetSumError(Exception):
    """Base class for every error raised before a search starts."""


class InvalidConfiguration(SubsetSumError, ValueError):
    """A problem instance or solver parameter set that cannot be searched."""


class MalformedInput(SubsetSumError, ValueError):
    """Input from the shell that is not an integer where one is required."""
