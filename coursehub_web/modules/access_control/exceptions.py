class AccessControlError(Exception):
    """Base exception for access control module."""
    pass


class AccessDeniedError(AccessControlError):
    """Raised when the signed-in user may not act on a specific resource."""
    def __init__(self, target: str = None, message: str = "You do not have permission to access this page."):
        self.target = target
        self.message = message
        super().__init__(message)
