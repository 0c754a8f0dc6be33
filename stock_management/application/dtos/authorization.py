"""DTOs for authorization checks (no dependency on ORM)."""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of one authorization check. Produced fresh per check, never mutated."""

    is_authorized: bool
    reason: str | None = None
    required_permissions: frozenset[str] = field(default_factory=frozenset)
    missing_permissions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def allowed(cls, required: Iterable[str] = ()) -> "AuthorizationResult":
        return cls(is_authorized=True, required_permissions=frozenset(required))

    @classmethod
    def denied(
        cls,
        reason: str,
        required: Iterable[str] = (),
        missing: Iterable[str] = (),
    ) -> "AuthorizationResult":
        return cls(
            is_authorized=False,
            reason=reason,
            required_permissions=frozenset(required),
            missing_permissions=frozenset(missing),
        )

    def __bool__(self) -> bool:
        return self.is_authorized
