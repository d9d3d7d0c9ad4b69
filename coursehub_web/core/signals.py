"""
Central Signal Registry.

Usage:
    # Publisher (sender)
    from coursehub_web.core.signals import session_cleared
    session_cleared.send(store, reason='logout')

    # Subscriber (receiver) - in module's events.py
    @session_cleared.connect
    def on_session_cleared(sender, **kwargs):
        ...
"""
from blinker import Namespace

session_signals = Namespace()

# Signal: Fired after a login/registration has been stored
# Payload: identity
session_established = session_signals.signal('session_established')

# Signal: Fired when a populated session is emptied
# Payload: reason ('logout', 'rejected', 'corrupt')
session_cleared = session_signals.signal('session_cleared')

# Signal: Fired when the route guard blocks a navigation
# Payload: target, decision, role
access_denied = session_signals.signal('access_denied')
