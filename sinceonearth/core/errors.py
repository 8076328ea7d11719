class NotFoundError(LookupError):
    """Requested row does not exist (or is not visible to the caller)."""


class ConflictError(ValueError):
    """Unique field already taken by another row."""


class InvalidInviteCodeError(ValueError):
    pass


class UserLimitReachedError(ConflictError):
    pass


class InvalidCredentialsError(ValueError):
    pass
