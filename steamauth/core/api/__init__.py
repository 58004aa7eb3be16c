"""Remote session interface: events, transport protocol, configuration."""
from .results import EResult
from .events import (
    Start,
    Connected,
    Disconnected,
    LoggedOn,
    LoggedOff,
    MachineAuthUpdate,
    TicketSettled,
    SessionEvent,
    LogOnDetails,
    MachineAuthResponse,
    EventQueue,
)
from .protocols import SessionTransport
from .memory_transport import MemoryTransport
from .config import AuthConfig, DEFAULT_CONFIG_FILE
from .retry import ReconnectStrategy, FixedDelayStrategy, ExponentialBackoffStrategy

__all__ = [
    # Codes
    'EResult',
    
    # Events
    'Start',
    'Connected',
    'Disconnected',
    'LoggedOn',
    'LoggedOff',
    'MachineAuthUpdate',
    'TicketSettled',
    'SessionEvent',
    'LogOnDetails',
    'MachineAuthResponse',
    'EventQueue',
    
    # Transport
    'SessionTransport',
    'MemoryTransport',
    
    # Configuration
    'AuthConfig',
    'DEFAULT_CONFIG_FILE',
    
    # Reconnect
    'ReconnectStrategy',
    'FixedDelayStrategy',
    'ExponentialBackoffStrategy',
]
