"""Authentication core: state machine, sentry storage, challenges."""
from .exceptions import (
    SteamAuthException,
    ConfigurationError,
    TransportError,
    SentryIOError,
    LoginFailedError,
    TicketError,
)
from .sentry import SentryStore, SentryWriteResult, sentry_path_for
from .challenge import ChallengeResolver, ChallengeKind, ChallengeType, ChallengeResult
from .session_controller import SessionController
from .orchestrator import (
    AuthOrchestrator,
    AuthOutcome,
    Credentials,
    LoginState,
    TerminationReason,
    Ticket,
)

__all__ = [
    'SteamAuthException',
    'ConfigurationError',
    'TransportError',
    'SentryIOError',
    'LoginFailedError',
    'TicketError',
    'SentryStore',
    'SentryWriteResult',
    'sentry_path_for',
    'ChallengeResolver',
    'ChallengeKind',
    'ChallengeType',
    'ChallengeResult',
    'SessionController',
    'AuthOrchestrator',
    'AuthOutcome',
    'Credentials',
    'LoginState',
    'TerminationReason',
    'Ticket',
]
