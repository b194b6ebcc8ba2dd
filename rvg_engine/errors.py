"""
Exceptions raised by the RVG fee engine.
"""


class UnknownPositionError(ValueError):
    """A VV position code is not in the catalog."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"VV position {code} not found in catalog")


class CalculationFinalizedError(RuntimeError):
    """The calculator was used again after finalize()."""
