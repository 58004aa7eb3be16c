"""
In-memory session transport.

Provides a scripted, non-networked transport for testing and dry runs.
"""
from typing import Callable, Iterable, List, Optional

from .events import (
    Connected,
    Disconnected,
    EventQueue,
    LoggedOn,
    LogOnDetails,
    MachineAuthResponse,
    SessionEvent,
)
from .protocols import SessionTransport
from .results import EResult


class MemoryTransport(SessionTransport):
    """
    Scripted in-memory transport.
    
    Records every call made by the client and answers with scripted events.
    
    Useful for:
    - Unit testing the login state machine
    - Rehearsing a run without network access
    
    Example:
        >>> transport = MemoryTransport(logon_results=[LoggedOn(EResult.OK)],
        ...                             ticket=b'\\x01\\x02')
        >>> orchestrator = AuthOrchestrator(config, transport)
        >>> outcome = await orchestrator.run()
    """
    
    def __init__(
        self,
        logon_results: Optional[Iterable[LoggedOn]] = None,
        ticket: Optional[bytes] = None,
        ticket_error: Optional[BaseException] = None,
        auto_connect: bool = True,
        disconnect_after_denial: bool = True,
        on_connect: Optional[Callable[[int], Iterable[SessionEvent]]] = None
    ):
        """
        Initialize the transport.
        
        Args:
            logon_results: LoggedOn replies, one consumed per log_on call
            ticket: Ticket bytes returned by get_auth_session_ticket
            ticket_error: Exception raised by get_auth_session_ticket instead
            auto_connect: Emit Connected on every connect call
            disconnect_after_denial: Emit Disconnected after a non-OK logon
            on_connect: Called with the connect count; returned events are
                queued instead of the automatic Connected
        """
        self._logon_results: List[LoggedOn] = list(logon_results or [])
        self._ticket = ticket
        self._ticket_error = ticket_error
        self._auto_connect = auto_connect
        self._disconnect_after_denial = disconnect_after_denial
        self._on_connect = on_connect
        self._events: Optional[EventQueue] = None
        
        self.connect_calls = 0
        self.disconnect_calls = 0
        self.logons: List[LogOnDetails] = []
        self.machine_auth_responses: List[MachineAuthResponse] = []
        self.ticket_requests: List[int] = []
        self.calls: List[str] = []
    
    def bind(self, events: EventQueue) -> None:
        self._events = events
    
    def push(self, event: SessionEvent) -> None:
        """Queue an event as if the remote network had sent it."""
        if self._events is None:
            raise RuntimeError("Transport is not bound to an event queue")
        self._events.put(event)
    
    async def connect(self) -> None:
        self.connect_calls += 1
        self.calls.append('connect')
        
        if self._on_connect is not None:
            for event in self._on_connect(self.connect_calls):
                self.push(event)
        elif self._auto_connect:
            self.push(Connected())
    
    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.calls.append('disconnect')
    
    async def log_on(self, details: LogOnDetails) -> None:
        self.logons.append(details)
        self.calls.append('log_on')
        
        if not self._logon_results:
            return
        
        reply = self._logon_results.pop(0)
        self.push(reply)
        if reply.result != EResult.OK and self._disconnect_after_denial:
            self.push(Disconnected())
    
    async def send_machine_auth_response(self, response: MachineAuthResponse) -> None:
        self.machine_auth_responses.append(response)
        self.calls.append('machine_auth_response')
    
    async def get_auth_session_ticket(self, app_id: int) -> bytes:
        self.ticket_requests.append(app_id)
        self.calls.append('ticket')
        
        if self._ticket_error is not None:
            raise self._ticket_error
        if self._ticket is None:
            raise RuntimeError("No ticket scripted")
        return self._ticket
