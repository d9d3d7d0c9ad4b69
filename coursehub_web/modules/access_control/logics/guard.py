"""Route guard: turns a policy decision into a navigation outcome."""
from dataclasses import dataclass
from typing import Optional, Union

from coursehub_web.models import Session
from .policies import CapabilityRequirement, Decision, evaluate


@dataclass(frozen=True)
class Proceed:
    target: str


@dataclass(frozen=True)
class RedirectToLogin:
    # Where to send the user once they have signed in.
    remembered_target: str


@dataclass(frozen=True)
class RedirectToForbidden:
    # A role mismatch is not fixed by signing in again, so nothing is remembered.
    remembered_target: Optional[str] = None


NavigationOutcome = Union[Proceed, RedirectToLogin, RedirectToForbidden]


def guard(target: str, requirement: CapabilityRequirement, session: Session) -> NavigationOutcome:
    """Gate navigation to ``target``. Recomputed on every attempt, never cached."""
    decision = evaluate(session, requirement)
    if decision is Decision.ALLOW:
        return Proceed(target)
    if decision is Decision.DENY_UNAUTHENTICATED:
        return RedirectToLogin(remembered_target=target)
    return RedirectToForbidden()
