class DomainError(Exception):
    """Base class for errors raised by the scholarship core."""


class Unauthenticated(DomainError):
    pass


class Forbidden(DomainError):
    pass


class InvalidObjectId(DomainError):
    def __init__(self, raw: str):
        super().__init__(f"Invalid id: {raw!r}")
        self.raw = raw


class NotFound(DomainError):
    def __init__(self, what: str, ident: str):
        super().__init__(f"{what} not found")
        self.what = what
        self.ident = ident


class InvalidTransition(DomainError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move application from {current} to {target}")
        self.current = current
        self.target = target


class UpstreamFailure(DomainError):
    """An external capability (payment processor) failed."""
