"""Remote outcome codes."""
from enum import IntEnum


class EResult(IntEnum):
    """
    Outcome codes reported by the remote network.
    
    Only the codes this client reacts to or commonly logs are listed;
    classification works on raw integers so unknown codes pass through.
    """
    Invalid = 0
    OK = 1
    Fail = 2
    NoConnection = 3
    InvalidPassword = 5
    LoggedInElsewhere = 6
    Timeout = 16
    ServiceUnavailable = 20
    AccessDenied = 15
    AccountLogonDenied = 63
    InvalidLoginAuthCode = 65
    AccountLogonDeniedNoMail = 66
    RateLimitExceeded = 84
    AccountLoginDeniedNeedTwoFactor = 85
    TwoFactorCodeMismatch = 88
    TryAnotherCM = 48
    
    @classmethod
    def describe(cls, code: int) -> str:
        """Gets a readable name for a code, falling back to the number."""
        try:
            return cls(code).name
        except ValueError:
            return f"Unknown({code})"
