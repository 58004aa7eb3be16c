"""
steamauth - Unattended login and auth session ticket client.

Usage:
    >>> from steamauth import AuthConfig, AuthOrchestrator
    >>> 
    >>> config = AuthConfig.from_file().merged(app_id=730).validate()
    >>> outcome = await AuthOrchestrator(config, transport).run()
    >>> print(outcome.ticket.hex)
"""
import logging

from .core.api import (
    AuthConfig,
    EResult,
    EventQueue,
    SessionTransport,
    MemoryTransport,
    FixedDelayStrategy,
    ExponentialBackoffStrategy,
)
from .core import (
    AuthOrchestrator,
    AuthOutcome,
    LoginState,
    TerminationReason,
    Ticket,
    SentryStore,
    ChallengeResolver,
    SteamAuthException,
)
from .transports import load_transport

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for steamauth modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger('steamauth').setLevel(level)


__all__ = [
    'AuthConfig',
    'EResult',
    'EventQueue',
    'SessionTransport',
    'MemoryTransport',
    'FixedDelayStrategy',
    'ExponentialBackoffStrategy',
    'AuthOrchestrator',
    'AuthOutcome',
    'LoginState',
    'TerminationReason',
    'Ticket',
    'SentryStore',
    'ChallengeResolver',
    'SteamAuthException',
    'load_transport',
    'setup_logging',
]
