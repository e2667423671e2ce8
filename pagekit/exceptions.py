"""
Exceptions raised by pagekit.

Only configuration problems are raised by pagekit itself. Parameter
normalization never raises, and errors coming from the database are
propagated unchanged.
"""


class PaginationError(Exception):
    pass


class ConfigurationError(PaginationError):
    """No storage collaborator is bound, or a required hook is missing."""


class RouteNotConfiguredError(ConfigurationError):
    """A named route was used for page links without a way to resolve it."""
