from dataclasses import dataclass


MOCK_TOKEN_PREFIX = "mock-jwt-"


@dataclass(frozen=True)
class SessionMarker:
    """
    Opaque value handed to clients after register/login.
    It is bookkeeping for the client only: nothing on the server stores or
    verifies it, so it must not be treated as a credential.
    """

    value: str

    def __str__(self) -> str:
        return self.value
