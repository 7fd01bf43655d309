"""Quote engine exceptions"""


class QuoteEngineError(Exception):
    """Base exception for the pricing layer"""

    pass


class InvalidInputError(QuoteEngineError):
    """Rating input falls outside a closed enumeration or is not a positive integer value"""

    pass


class RateTableError(QuoteEngineError):
    """Rate tables break a structural invariant (missing entry, non-monotonic multipliers, ...)"""

    pass
