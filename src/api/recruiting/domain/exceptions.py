"""Domain exceptions for the recruiting context."""


class InvalidJobTitleError(ValueError):
    """Raised when a job title is blank."""


class InvalidStageError(ValueError):
    """Raised when a stage has no name or an unusable color."""


class InvalidStageOrderError(ValueError):
    """Raised when a requested stage order is not a permutation of the job's stages."""


class InvalidMemberError(ValueError):
    """Raised when member data is malformed."""
