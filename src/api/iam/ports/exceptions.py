"""Port-level exceptions for IAM bounded context.

Raised by repository implementations and handled by the application
layer, which turns them into result objects.
"""


class DuplicateOrganizationSlugError(Exception):
    """Raised when an organization slug is already taken.

    Slugs are globally unique because they are the first path segment of
    every tenant-protected URL.
    """

    pass


class OrganizationNotFoundError(Exception):
    """Raised when an organization does not exist."""

    pass


class PortalAccountNotFoundError(Exception):
    """Raised when no portal account matches an email."""

    pass
