"""Propagate the acting admin's identity through the call stack using contextvars."""

from contextlib import contextmanager
from contextvars import ContextVar
from uuid import UUID

_current_admin_id: ContextVar[UUID | None] = ContextVar("current_admin_id", default=None)


def get_current_admin_id() -> UUID:
    """
    Get the acting admin's ID from context.

    Raises RuntimeError if no admin context is set. Admin-only code paths
    reached without an authenticated session are a wiring bug.
    """
    admin_id = _current_admin_id.get()
    if admin_id is None:
        raise RuntimeError(
            "No admin context set. This usually means admin-scoped code "
            "ran outside of an authenticated admin request."
        )
    return admin_id


def current_admin_id_or_none() -> UUID | None:
    """Acting admin's ID, or None for system work (seeding, public redemptions)."""
    return _current_admin_id.get()


def set_current_admin_id(admin_id: UUID) -> None:
    """Called by auth middleware after validating the session."""
    _current_admin_id.set(admin_id)


def clear_current_admin_id() -> None:
    """Called by auth middleware in a finally block after the request."""
    _current_admin_id.set(None)


@contextmanager
def admin_context(admin_id: UUID):
    """
    Temporarily act as an admin.

    Example:
        with admin_context(admin.id):
            pricing_service.update("house-washing", ServicePricingUpdate(base_price=225))
    """
    previous = _current_admin_id.get()
    set_current_admin_id(admin_id)
    try:
        yield
    finally:
        if previous is None:
            clear_current_admin_id()
        else:
            set_current_admin_id(previous)
