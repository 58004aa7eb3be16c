"""
Second-factor challenge handling.

Classifies login outcomes into challenge kinds and reads the operator's
response.
"""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .api.results import EResult
from .logging import get_logger

logger = get_logger(__name__)


class ChallengeType(Enum):
    """Kind of second factor requested by the remote network."""
    NONE = 'none'
    EMAIL_CODE = 'email_code'
    TWO_FACTOR_CODE = 'two_factor_code'


@dataclass(frozen=True)
class ChallengeKind:
    """Challenge classification; ``email_domain`` is set for email codes."""
    type: ChallengeType
    email_domain: Optional[str] = None
    
    @property
    def required(self) -> bool:
        return self.type is not ChallengeType.NONE


NO_CHALLENGE = ChallengeKind(ChallengeType.NONE)


@dataclass(frozen=True)
class ChallengeResult:
    """Operator response; ``code`` is None when the challenge was declined."""
    code: Optional[str] = None
    
    @property
    def declined(self) -> bool:
        return self.code is None
    
    @classmethod
    def provided(cls, code: str) -> 'ChallengeResult':
        return cls(code=code)
    
    @classmethod
    def decline(cls) -> 'ChallengeResult':
        return cls(code=None)


class ChallengeResolver:
    """
    Decides whether a login outcome is a challenge and obtains the code.
    
    At most one code is requested per login outcome; a wrong code comes back
    as a new outcome and is classified again.
    """
    
    def __init__(self, reader: Optional[Callable[[str], str]] = None,
                 suppress_interactive: bool = False):
        """
        Initialize resolver.
        
        Args:
            reader: Callable that shows a prompt and returns one line of input
            suppress_interactive: Decline every challenge without prompting
        """
        self._reader = reader or input
        self.suppress_interactive = suppress_interactive
    
    @staticmethod
    def classify(result: int, email_domain: Optional[str] = None) -> ChallengeKind:
        """
        Classify a login outcome code.
        
        Args:
            result: Outcome code from the LoggedOn event
            email_domain: Domain the email code was sent to
            
        Returns:
            ChallengeKind; NONE for success and for terminal failures alike
        """
        if result == EResult.AccountLogonDenied:
            return ChallengeKind(ChallengeType.EMAIL_CODE, email_domain)
        if result == EResult.AccountLoginDeniedNeedTwoFactor:
            return ChallengeKind(ChallengeType.TWO_FACTOR_CODE)
        return NO_CHALLENGE
    
    @staticmethod
    def prompt_for(kind: ChallengeKind) -> str:
        if kind.type is ChallengeType.TWO_FACTOR_CODE:
            return "Please enter your 2 factor auth code from your authenticator app: "
        return f"Please enter the auth code sent to the email at {kind.email_domain}: "
    
    async def obtain(self, kind: ChallengeKind) -> ChallengeResult:
        """
        Get the operator's response to a challenge.
        
        Blocks the caller until a line is read, unless interactive input is
        suppressed, in which case the challenge is declined immediately.
        
        Args:
            kind: Challenge to answer
            
        Returns:
            ChallengeResult with the code verbatim, or a declined result
        """
        if not kind.required:
            raise ValueError("No challenge to obtain a code for")
        
        if self.suppress_interactive:
            logger.info("Interactive challenges disabled, declining")
            return ChallengeResult.decline()
        
        code = await asyncio.to_thread(self._reader, self.prompt_for(kind))
        return ChallengeResult.provided(code)
