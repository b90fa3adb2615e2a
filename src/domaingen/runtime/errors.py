"""Error taxonomy shared by generated repositories and the generic service.

Sentinel conditions are exception classes, so callers check them with
``isinstance`` or the ``is_*`` helpers, which also follow wrapped causes.
"""

from __future__ import annotations


class DomainError(Exception):
    pass


class EntityNotFoundError(DomainError):
    def __init__(self, message: str = "entity not found") -> None:
        super().__init__(message)


class EntityAlreadyExistsError(DomainError):
    def __init__(self, message: str = "entity already exists") -> None:
        super().__init__(message)


class EntityValidationError(DomainError):
    def __init__(self, message: str = "validation failed") -> None:
        super().__init__(message)


class InvalidIDError(DomainError, ValueError):
    pass


class ServiceError(DomainError):
    """Stage-prefixed wrapper; the original error is ``cause`` and ``__cause__``."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause


def _in_chain(err: BaseException | None, kind: type[BaseException]) -> bool:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, kind):
            return True
        seen.add(id(err))
        err = err.__cause__ or err.__context__
    return False


def is_not_found(err: BaseException | None) -> bool:
    return _in_chain(err, EntityNotFoundError)


def is_already_exists(err: BaseException | None) -> bool:
    return _in_chain(err, EntityAlreadyExistsError)


def is_validation(err: BaseException | None) -> bool:
    return _in_chain(err, EntityValidationError)
