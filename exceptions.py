# exceptions.py


class PackagingError(Exception):
    """Base class for every failure that aborts a packaging run."""


class EnumerationError(PackagingError):
    pass


class ReadError(PackagingError):
    pass


class HashingStateError(PackagingError):
    pass


class SigningError(PackagingError):
    pass


class OutputError(PackagingError):
    pass
