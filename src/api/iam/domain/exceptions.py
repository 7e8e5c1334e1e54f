"""Domain exceptions for the IAM context."""


class InvalidOrganizationNameError(ValueError):
    """Raised when an organization name is empty."""

    pass


class InvalidSlugError(ValueError):
    """Raised when a slug cannot be derived or is not URL-safe."""

    pass
