"""Exceptions raised before rendering starts."""


class ConfigurationError(ValueError):
    """Invalid render, camera or scene configuration.

    Raised at construction time so that a bad configuration never
    produces a distorted image.
    """
    pass
