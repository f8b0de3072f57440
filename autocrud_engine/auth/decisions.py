"""
Authorization decision types.

A denial is a value, not an exception: every ``Decision`` carries a
machine-checkable reason plus enough context for a transport layer to
render a 401/403/404 without re-deriving why.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Identity:
    """An authenticated actor, produced by an external identity provider."""

    user_id: int
    role: str
    email: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Identity":
        """Build an identity from a token payload (``userId``/``user_id`` and ``role``)."""
        user_id = data.get("user_id", data.get("userId"))
        role = data.get("role")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise ValueError(f"Identity requires an integer user id, got {user_id!r}")
        if not isinstance(role, str) or not role:
            raise ValueError(f"Identity requires a role, got {role!r}")
        return cls(user_id=user_id, role=role, email=data.get("email"))


@dataclass(frozen=True)
class AuthorizationContext:
    """
    One inbound action to authorize.

    Attributes:
        identity: The actor, or None when the request is unauthenticated
        model_name: Target model name
        action: Transport verb (create/read/update/delete)
        record_id: Target record for single-record read/update/delete;
            None for create and collection reads
    """

    identity: Optional[Identity]
    model_name: str
    action: str
    record_id: Any = None

    @property
    def is_single_record(self) -> bool:
        return self.record_id is not None


class DenyReason(str, Enum):
    """Machine-checkable denial reasons."""

    UNAUTHENTICATED = "unauthenticated"
    MODEL_NOT_FOUND = "model_not_found"
    INVALID_ACTION = "invalid_action"
    INSUFFICIENT_PERMISSION = "insufficient_permission"
    NOT_FOUND = "not_found"
    NOT_OWNER = "not_owner"
    LOOKUP_FAILED = "lookup_failed"


_STATUS_CODES: Dict[DenyReason, int] = {
    DenyReason.UNAUTHENTICATED: 401,
    DenyReason.MODEL_NOT_FOUND: 404,
    DenyReason.INVALID_ACTION: 400,
    DenyReason.INSUFFICIENT_PERMISSION: 403,
    DenyReason.NOT_FOUND: 404,
    DenyReason.NOT_OWNER: 403,
    DenyReason.LOOKUP_FAILED: 503,
}

RowFilter = Callable[[Mapping], bool]


@dataclass(frozen=True)
class Decision:
    """
    Outcome of one authorization check.

    On ALLOW, ``row_filter`` restricts a collection read to the actor's
    records, ``forced_owner_assignment`` names the field that must be set
    to the actor's id on create, and ``protected_fields`` lists fields a
    non-admin update may not change.
    """

    allow: bool
    reason: Optional[DenyReason] = None
    model_name: Optional[str] = None
    role: Optional[str] = None
    user_id: Optional[int] = None
    required_permission: Optional[str] = None
    owner_field: Optional[str] = None
    row_filter: Optional[RowFilter] = field(default=None, compare=False)
    forced_owner_assignment: Optional[str] = None
    protected_fields: Tuple[str, ...] = ()
    message: str = ""

    @property
    def status_code(self) -> int:
        if self.allow:
            return 200
        return _STATUS_CODES.get(self.reason, 403)

    def filter_records(self, records: Iterable[Mapping]) -> List[Mapping]:
        """Apply the row filter (no-op when none was emitted)."""
        if self.row_filter is None:
            return list(records)
        return [record for record in records if self.row_filter(record)]

    def prepare_payload(self, payload: Mapping) -> Dict[str, Any]:
        """
        Return a copy of a client payload with ownership rules applied.

        Protected fields are dropped and the forced owner field is set to
        the actor's id, discarding any client-submitted value.
        """
        prepared = {k: v for k, v in payload.items() if k not in self.protected_fields}
        if self.forced_owner_assignment and self.user_id is not None:
            prepared[self.forced_owner_assignment] = self.user_id
        return prepared

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary, suitable for an HTTP error body."""
        data: Dict[str, Any] = {"allow": self.allow}
        if self.reason is not None:
            data["reason"] = self.reason.value
        optional = {
            "message": self.message,
            "model": self.model_name,
            "role": self.role,
            "required": self.required_permission,
            "ownerField": self.owner_field,
            "forcedOwnerAssignment": self.forced_owner_assignment,
        }
        data.update({k: v for k, v in optional.items() if v})
        if self.row_filter is not None:
            data["filtered"] = True
        return data

    @classmethod
    def allowed(cls, **kwargs: Any) -> "Decision":
        return cls(allow=True, **kwargs)

    @classmethod
    def denied(cls, reason: DenyReason, **kwargs: Any) -> "Decision":
        return cls(allow=False, reason=reason, **kwargs)
