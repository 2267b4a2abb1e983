# errors.py


class AlgostepError(Exception):
    """Base class for caller mistakes the engine refuses to guess around."""


class UnknownAlgorithmError(AlgostepError, ValueError):
    def __init__(self, algorithm_id):
        self.algorithm_id = algorithm_id
        super().__init__(f"Algorithm '{algorithm_id}' not found in dispatch table.")


class InvalidOperationError(AlgostepError, ValueError):
    """Raised for a BST operation that is neither insert, delete nor search."""
