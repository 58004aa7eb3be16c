"""
Session events and wire records.

The remote collaborator reports everything through a closed set of event
types delivered into one ordered queue, drained by a single control loop.
"""
import asyncio
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Union


@dataclass(frozen=True)
class Start:
    """Begins a run."""


@dataclass(frozen=True)
class Connected:
    """Session with the remote network established."""


@dataclass(frozen=True)
class Disconnected:
    """Session lost or closed."""


@dataclass(frozen=True)
class LoggedOn:
    """Outcome of a login submission."""
    result: int
    extended_result: Optional[int] = None
    email_domain: Optional[str] = None


@dataclass(frozen=True)
class LoggedOff:
    """Remote network ended the logged-on session."""
    result: int


@dataclass(frozen=True)
class MachineAuthUpdate:
    """
    Remote request to write a chunk of the machine-auth (sentry) file.
    
    Attributes:
        offset: Byte offset to write at
        data: Chunk payload
        bytes_to_write: Number of bytes of ``data`` to write (None = all)
        file_name: Name the remote network uses for the file
        job_id: Job identifier to echo in the acknowledgment
        one_time_password: Token to echo in the acknowledgment
    """
    offset: int
    data: bytes
    file_name: str = ""
    job_id: int = 0
    one_time_password: Optional[bytes] = None
    bytes_to_write: Optional[int] = None
    
    @property
    def payload(self) -> bytes:
        """Bytes that will actually be written."""
        if self.bytes_to_write is None:
            return self.data
        return self.data[:self.bytes_to_write]


@dataclass(frozen=True)
class TicketSettled:
    """Completion of a pending ticket request."""
    ticket: Optional[bytes] = None
    error: Optional[BaseException] = None


SessionEvent = Union[
    Start, Connected, Disconnected, LoggedOn, LoggedOff,
    MachineAuthUpdate, TicketSettled
]


@dataclass
class LogOnDetails:
    """Login submission sent to the remote network."""
    username: str
    password: str = field(repr=False)
    auth_code: Optional[str] = field(default=None, repr=False)
    two_factor_code: Optional[str] = field(default=None, repr=False)
    sentry_file_hash: Optional[bytes] = None


@dataclass
class MachineAuthResponse:
    """Acknowledgment for a MachineAuthUpdate."""
    job_id: int
    result: int
    bytes_written: int
    offset: int
    file_name: str
    file_size: int
    sentry_file_hash: Optional[bytes]
    one_time_password: Optional[bytes]
    last_error: int = 0


class EventQueue:
    """
    Ordered queue of session events.
    
    Holds no event-loop objects until a consumer waits, so it can be built
    before the loop that drains it is running.
    """
    
    def __init__(self):
        self._items: Deque[SessionEvent] = deque()
        self._waiter: Optional[asyncio.Future] = None
    
    def put(self, event: SessionEvent):
        """Enqueues an event; safe to call from transport callbacks."""
        self._items.append(event)
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(None)
    
    async def get(self, timeout: Optional[float] = None) -> Optional[SessionEvent]:
        """
        Waits for the next event.
        
        Args:
            timeout: Polling interval in seconds (None waits forever)
            
        Returns:
            The next event, or None if the interval elapsed
        """
        if not self._items:
            self._waiter = asyncio.get_running_loop().create_future()
            try:
                await asyncio.wait_for(self._waiter, timeout)
            except asyncio.TimeoutError:
                return None
            finally:
                self._waiter = None
        return self._items.popleft()
    
    def empty(self) -> bool:
        return not self._items
    
    def __len__(self) -> int:
        return len(self._items)
