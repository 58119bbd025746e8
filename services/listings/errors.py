class ListingNotFoundError(KeyError):
    pass


class ListingStateError(ValueError):
    pass


class BoostValidationError(ValueError):
    pass


class BoostNotAllowedError(PermissionError):
    pass


class CollaboratorFetchError(RuntimeError):
    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(message)
        self.source = source


class PageRequestError(ValueError):
    pass
