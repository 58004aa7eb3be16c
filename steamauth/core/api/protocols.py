"""
Session transport protocol.

Defines the interface of the remote session collaborator: network I/O,
message framing and credential cryptography live behind it.
"""
from typing import Protocol, runtime_checkable

from .events import EventQueue, LogOnDetails, MachineAuthResponse


@runtime_checkable
class SessionTransport(Protocol):
    """
    Protocol for remote session transports.
    
    Implementations report connection state, login outcomes, log-offs and
    machine-auth updates by putting events on the bound EventQueue. They
    never call back into the orchestrator directly.
    """
    
    def bind(self, events: EventQueue) -> None:
        """
        Attach the queue that receives this transport's events.
        
        Args:
            events: Event queue drained by the control loop
        """
        ...
    
    async def connect(self) -> None:
        """
        Start connecting.
        
        Completion is signalled with a Connected event and failure with a
        Disconnected event, never with an exception.
        """
        ...
    
    async def disconnect(self) -> None:
        """Tear down the session."""
        ...
    
    async def log_on(self, details: LogOnDetails) -> None:
        """Submit a login; the outcome arrives as a LoggedOn event."""
        ...
    
    async def send_machine_auth_response(self, response: MachineAuthResponse) -> None:
        """Acknowledge a machine-auth update."""
        ...
    
    async def get_auth_session_ticket(self, app_id: int) -> bytes:
        """
        Request an auth session ticket.
        
        Args:
            app_id: Application the ticket is scoped to
            
        Returns:
            Opaque ticket bytes
        """
        ...
