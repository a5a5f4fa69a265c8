from django.http import HttpRequest
from ninja_extra.throttling import AnonRateThrottle, SimpleRateThrottle, UserRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    rate = "60/min"


class UserDefaultThrottle(UserRateThrottle):
    rate = "100/min"


class RegistrationThrottle(SimpleRateThrottle):
    """Keyed on the client IP, whether or not the caller sent a token."""

    scope = "registration"
    rate = "30/min"

    def get_cache_key(self, request: HttpRequest) -> str:
        return self.cache_format % {"scope": self.scope, "ident": self.get_ident(request)}


class WriteThrottle(UserRateThrottle):
    rate = "100/min"


class CheckInThrottle(UserRateThrottle):
    rate = "600/min"
