# unistay/core/permissions.py
"""
Permission and authorization decisions.

Every role/relationship check in the application goes through this module so
the permission matrix lives in one place. Handlers never compare role
strings themselves; they ask for a decision and let the raised
``AuthorizationError`` propagate.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Optional, Set, Tuple

from unistay.core.exceptions import AuthorizationError, ConflictError, ErrorCode
from unistay.models.enums import BookingStatus, UserRole

if TYPE_CHECKING:
    from unistay.models.booking import Booking
    from unistay.models.hostel import Hostel


@dataclass(frozen=True)
class Principal:
    """
    Represents an authenticated user in the service layer.

    Attributes:
        user_id: Unique identifier for the user
        role: User's role
    """
    user_id: str
    role: UserRole

    def has_any_role(self, roles: Iterable[UserRole]) -> bool:
        """Check if principal has any of the specified roles."""
        return self.role in set(roles)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class BookingParty(str, Enum):
    """How a principal relates to a particular booking."""
    STUDENT = "student"
    OWNER = "owner"
    ADMIN = "admin"


# (from, to) -> parties allowed to take the edge. Anything missing is invalid.
BOOKING_TRANSITIONS: Dict[Tuple[BookingStatus, BookingStatus], FrozenSet[BookingParty]] = {
    (BookingStatus.PENDING, BookingStatus.CONFIRMED): frozenset({BookingParty.OWNER, BookingParty.ADMIN}),
    (BookingStatus.PENDING, BookingStatus.CANCELLED): frozenset({BookingParty.OWNER, BookingParty.ADMIN}),
    (BookingStatus.CONFIRMED, BookingStatus.CANCELLED): frozenset({BookingParty.OWNER, BookingParty.ADMIN}),
    (BookingStatus.CONFIRMED, BookingStatus.COMPLETED): frozenset({BookingParty.STUDENT, BookingParty.ADMIN}),
}


def require_role(
    principal: Principal,
    allowed_roles: Iterable[UserRole],
    *,
    error_message: Optional[str] = None,
) -> None:
    """
    Assert that principal has one of the allowed roles.

    Raises:
        AuthorizationError: If principal lacks required role

    Example:
        >>> require_role(principal, [UserRole.ADMIN])
    """
    allowed_roles = list(allowed_roles)
    if not principal.has_any_role(allowed_roles):
        roles_str = ", ".join(r.value for r in allowed_roles)
        raise AuthorizationError(
            error_message or f"This action requires one of the roles: {roles_str}",
            details={"role": principal.role.value, "required_roles": [r.value for r in allowed_roles]},
        )


def booking_parties(principal: Principal, booking: "Booking") -> Set[BookingParty]:
    """Return every capacity in which ``principal`` relates to ``booking``."""
    parties: Set[BookingParty] = set()
    if booking.student_id == principal.user_id:
        parties.add(BookingParty.STUDENT)
    if booking.hostel.owner_id == principal.user_id:
        parties.add(BookingParty.OWNER)
    if principal.is_admin:
        parties.add(BookingParty.ADMIN)
    return parties


def authorize_booking_view(principal: Principal, booking: "Booking") -> None:
    """Only the booking's student, the hostel's owner or an admin may read it."""
    if not booking_parties(principal, booking):
        raise AuthorizationError(
            "You do not have access to this booking",
            details={"booking_id": booking.id},
        )


def authorize_booking_transition(
    principal: Principal,
    booking: "Booking",
    target: BookingStatus,
) -> None:
    """
    Decide whether ``principal`` may move ``booking`` to ``target``.

    Order of checks: unrelated callers are rejected before transition
    validity is revealed; then the edge must exist; then the caller's
    relationship must be one the edge allows.

    Raises:
        AuthorizationError: caller unrelated, or edge reserved for another party
        ConflictError: the edge is not part of the lifecycle
    """
    parties = booking_parties(principal, booking)
    if not parties:
        raise AuthorizationError(
            "You do not have access to this booking",
            details={"booking_id": booking.id},
        )

    current = booking.status
    allowed = BOOKING_TRANSITIONS.get((current, target))
    if allowed is None:
        raise ConflictError(
            f"Cannot change booking status from '{current.value}' to '{target.value}'",
            error_code=ErrorCode.INVALID_TRANSITION,
            details={"from_status": current.value, "to_status": target.value},
        )

    if not parties & allowed:
        raise AuthorizationError(
            f"You are not allowed to mark this booking as '{target.value}'",
            details={
                "booking_id": booking.id,
                "to_status": target.value,
                "allowed_parties": sorted(p.value for p in allowed),
            },
        )


def can_manage_hostel(principal: Principal, hostel: "Hostel") -> bool:
    """Hostel owners manage their own listings; admins manage all."""
    return principal.is_admin or hostel.owner_id == principal.user_id


def authorize_hostel_management(principal: Principal, hostel: "Hostel") -> None:
    if not can_manage_hostel(principal, hostel):
        raise AuthorizationError(
            "You do not manage this hostel",
            details={"hostel_id": hostel.id},
        )


__all__ = [
    "Principal",
    "BookingParty",
    "BOOKING_TRANSITIONS",
    "require_role",
    "booking_parties",
    "authorize_booking_view",
    "authorize_booking_transition",
    "can_manage_hostel",
    "authorize_hostel_management",
]
