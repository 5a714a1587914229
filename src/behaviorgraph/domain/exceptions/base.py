"""Base exception for behaviorgraph."""


class BehaviorGraphError(Exception):
    """Root exception for all behaviorgraph errors.

    Findings are reported as values. Exceptions are raised only for hard
    stops that no caller can continue past.
    """
