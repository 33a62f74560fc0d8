from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from postboard.core import errors as api_errors
from postboard.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    OperationFailure,
    ServiceError,
    ValidationError,
)
from postboard.services._shared.policies.common import is_owner
from postboard.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data carried into services.

    :param actor_id: Authenticated user identifier, if any.
    """

    actor_id: int | None = None


class BaseService:
    """
    Base class for application services.

    * Opens read-only and read-write units of work.
    * Translates service errors into ``APIError`` instances.
    * Hosts the shared ownership check.

    Services never touch the global session directly; they go through a
    unit of work.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(
        self,
        exc: Exception,
        *,
        status_overrides: Mapping[type[ServiceError], int] | None = None,
    ) -> Exception:
        """
        Map a service error to its HTTP counterpart.

        :param exc: Exception raised within the service.
        :param status_overrides: Per-route status replacements keyed by error
            class, for endpoints with a legacy status contract.
        :returns: Translated exception ready to be re-raised; non-service
            exceptions are returned untouched.
        :rtype: Exception
        """
        if status_overrides:
            for err_type, status in status_overrides.items():
                if isinstance(exc, err_type):
                    return api_errors.APIError(
                        message=str(exc),
                        status_code=status,
                        code=api_errors._http_status_to_code(status),
                    )

        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))
        if isinstance(exc, AuthorizationError):
            return api_errors.Forbidden(str(exc))
        if isinstance(exc, InvalidTokenError):
            return api_errors.Unauthorized(str(exc))
        if isinstance(exc, OperationFailure):
            return api_errors.InternalError(str(exc))
        if isinstance(exc, AuthenticationError):
            return api_errors.APIError(str(exc), status_code=400, code="invalid_credentials")
        if isinstance(exc, (ValidationError, ServiceError)):
            return api_errors.BadRequest(str(exc))
        return exc

    # --------------------------- AuthZ --------------------------------------

    def ensure_owner(self, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the context actor owns the resource.

        :param owner_id: Expected owner user id.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If the actor is not the owner.
        """
        if not is_owner(actor_id=self.ctx.actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You can only modify your own resources")
