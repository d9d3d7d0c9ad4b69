"""Access policy: pure decisions over a :class:`Session`.

Nothing here touches Flask, storage or the network.
"""
import enum
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Mapping, Optional

from coursehub_web.models import Course, Identity, Quiz, Role, Session


class Decision(enum.Enum):
    ALLOW = 'allow'
    DENY_UNAUTHENTICATED = 'deny_unauthenticated'
    DENY_FORBIDDEN = 'deny_forbidden'


@dataclass(frozen=True)
class CapabilityRequirement:
    """Roles accepted by a protected view. Empty means any signed-in user."""

    roles: FrozenSet[Role] = field(default_factory=frozenset)

    @classmethod
    def of(cls, *roles: Role) -> 'CapabilityRequirement':
        return cls(frozenset(roles))

    @property
    def any_authenticated(self) -> bool:
        return not self.roles


ANY_AUTHENTICATED = CapabilityRequirement.of()
STAFF_AREA = CapabilityRequirement.of(Role.TEACHER, Role.ADMIN)
LEARNER_AREA = CapabilityRequirement.of(Role.STUDENT, Role.ADMIN)


def evaluate(session: Session, requirement: CapabilityRequirement) -> Decision:
    """Decide whether ``session`` satisfies ``requirement``."""
    if not session.is_authenticated:
        return Decision.DENY_UNAUTHENTICATED
    if requirement.any_authenticated:
        return Decision.ALLOW
    if session.identity.role in requirement.roles:
        return Decision.ALLOW
    return Decision.DENY_FORBIDDEN


def validate_route_table(requirements: Iterable[CapabilityRequirement]) -> None:
    """Every restricted view must list ADMIN explicitly; there is no implicit bypass."""
    for requirement in requirements:
        if requirement.roles and Role.ADMIN not in requirement.roles:
            raise ValueError(
                "Requirement %s does not admit ADMIN" % sorted(role.value for role in requirement.roles)
            )


# --- Ownership ---


def can_manage(session: Session, owner: Optional[Identity]) -> bool:
    """Admins manage everything; teachers manage what they own."""
    identity = session.identity
    if identity is None:
        return False
    if identity.role is Role.ADMIN:
        return True
    return identity.role is Role.TEACHER and owner is not None and owner.id == identity.id


def can_manage_course(session: Session, course: Optional[Course]) -> bool:
    if course is None:
        return False
    return can_manage(session, course.teacher)


def can_manage_quiz(session: Session, quiz: Optional[Quiz]) -> bool:
    if quiz is None:
        return False
    return can_manage(session, quiz.owner)


def can_take_quiz(session: Session, quiz: Optional[Quiz]) -> bool:
    if quiz is None or session.identity is None:
        return False
    return session.identity.role is Role.STUDENT and quiz.is_active


def can_create_course(session: Session) -> bool:
    return evaluate(session, STAFF_AREA) is Decision.ALLOW


def capability_map(session: Session) -> Mapping[str, bool]:
    """Flattened view of what the current session may do, for templates and the JSON API."""
    return {
        'can_browse': evaluate(session, ANY_AUTHENTICATED) is Decision.ALLOW,
        'can_create_course': can_create_course(session),
        'can_view_own_courses': evaluate(session, STAFF_AREA) is Decision.ALLOW,
        'can_view_own_attempts': evaluate(session, LEARNER_AREA) is Decision.ALLOW,
    }
