"""
Input errors raised by the effects engine.

Every error is a precondition violation by the caller. They subclass the
built-in exception a caller would naturally catch (ValueError / KeyError).
"""


class InvalidYieldError(ValueError):
    """Yield is zero, negative or not finite."""


class InvalidDistanceError(ValueError):
    """Point evaluation requested at a non-positive distance."""


class InvalidPopulationModelError(ValueError):
    """Population model has a non-positive density or core radius."""


class CatalogueError(KeyError):
    """Unknown weapon preset, city or burst type name."""
