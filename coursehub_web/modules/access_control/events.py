import logging

from coursehub_web.core.signals import access_denied, session_cleared, session_established

logger = logging.getLogger(__name__)


def on_session_established(sender, identity, **kwargs):
    logger.info(f"Session started for user {identity.id} ({identity.role.value})")


def on_session_cleared(sender, reason, **kwargs):
    logger.info(f"Session cleared ({reason})")


def on_access_denied(sender, target, decision, role=None, **kwargs):
    logger.warning(f"Access to {target} denied ({decision}) for {role.value if role else 'anonymous'}")


def register_events():
    """Connect signals."""
    session_established.connect(on_session_established)
    session_cleared.connect(on_session_cleared)
    access_denied.connect(on_access_denied)
