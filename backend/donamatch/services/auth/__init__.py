from donamatch.services.auth.rotation import RefreshRotationPolicy
from donamatch.services.auth.service import AuthService

__all__ = ["AuthService", "RefreshRotationPolicy"]
