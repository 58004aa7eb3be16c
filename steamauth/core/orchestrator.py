"""
Authentication state machine.

Sequences connect, login, challenge handling and ticket acquisition.
All events are processed one at a time on a single control loop:

    Idle --start--> Connecting --Connected--> AwaitingLoginResult
    AwaitingLoginResult --OK--> FetchingTicket --settled--> Terminated
    AwaitingLoginResult --challenge--> AwaitingChallengeInput
    AwaitingChallengeInput --Connected--> AwaitingLoginResult
    AwaitingLoginResult --other failure--> Terminated

Machine-auth updates are handled in any state without changing it.
"""
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .api.config import AuthConfig
from .api.events import (
    Connected,
    Disconnected,
    EventQueue,
    LoggedOff,
    LoggedOn,
    LogOnDetails,
    MachineAuthResponse,
    MachineAuthUpdate,
    SessionEvent,
    Start,
    TicketSettled,
)
from .api.protocols import SessionTransport
from .api.results import EResult
from .api.retry import FixedDelayStrategy, ReconnectStrategy
from .challenge import ChallengeResolver, ChallengeType
from .exceptions import LoginFailedError, SentryIOError, TicketError
from .logging import get_logger
from .sentry import SentryStore
from .session_controller import SessionController

logger = get_logger(__name__)


class LoginState(Enum):
    IDLE = 'Idle'
    CONNECTING = 'Connecting'
    AWAITING_LOGIN_RESULT = 'AwaitingLoginResult'
    AWAITING_CHALLENGE_INPUT = 'AwaitingChallengeInput'
    FETCHING_TICKET = 'FetchingTicket'
    TERMINATED = 'Terminated'


class TerminationReason(Enum):
    TICKET_ISSUED = 'ticket_issued'
    TICKET_FAILED = 'ticket_failed'
    LOGIN_FAILED = 'login_failed'
    CHALLENGE_DECLINED = 'challenge_declined'
    STOPPED = 'stopped'
    
    @property
    def is_error(self) -> bool:
        return self in (TerminationReason.TICKET_FAILED, TerminationReason.LOGIN_FAILED)


@dataclass
class Credentials:
    """Login credentials; codes are filled in by challenge handling."""
    username: str
    password: str = field(repr=False)
    auth_code: Optional[str] = field(default=None, repr=False)
    two_factor_code: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class Ticket:
    """Auth session ticket for one application."""
    app_id: int
    data: bytes
    
    @property
    def hex(self) -> str:
        """Upper-case hex without separators."""
        return self.data.hex().upper()


@dataclass
class AuthOutcome:
    """How a run ended."""
    reason: TerminationReason
    ticket: Optional[Ticket] = None
    result: Optional[int] = None
    extended_result: Optional[int] = None
    error: Optional[BaseException] = None
    
    @property
    def succeeded(self) -> bool:
        return self.reason is TerminationReason.TICKET_ISSUED


class AuthOrchestrator:
    """
    Top-level login state machine.
    
    Example:
        >>> config = AuthConfig(username="alice", password="...", app_id=730)
        >>> orchestrator = AuthOrchestrator(config, transport)
        >>> outcome = await orchestrator.run()
        >>> outcome.ticket.hex
        '14000000...'
    """
    
    def __init__(
        self,
        config: AuthConfig,
        transport: SessionTransport,
        *,
        sentry: Optional[SentryStore] = None,
        resolver: Optional[ChallengeResolver] = None,
        reconnect: Optional[ReconnectStrategy] = None,
        reader: Optional[Callable[[str], str]] = None
    ):
        """
        Initialize orchestrator.
        
        Args:
            config: Validated client configuration
            transport: Remote session transport
            sentry: Sentry store (defaults to the account's file in sentry_dir)
            resolver: Challenge resolver (defaults to one built from config)
            reconnect: Reconnect strategy (defaults to config.reconnect_delay)
            reader: Line reader for challenge prompts, if resolver not given
        """
        self._config = config
        self._transport = transport
        self._credentials = Credentials(config.username or '', config.password or '')
        self._sentry = sentry or SentryStore(config.sentry_path)
        self._resolver = resolver or ChallengeResolver(
            reader=reader,
            suppress_interactive=config.no_2fa
        )
        
        self._events = EventQueue()
        self._transport.bind(self._events)
        self._run_flag = asyncio.Event()
        self._session = SessionController(
            transport,
            self._run_flag,
            reconnect or FixedDelayStrategy(config.reconnect_delay)
        )
        
        self._state = LoginState.IDLE
        self._outcome: Optional[AuthOutcome] = None
        self.history: List[LoginState] = []
    
    # =========================================================================
    # Properties
    # =========================================================================
    
    @property
    def state(self) -> LoginState:
        return self._state
    
    @property
    def outcome(self) -> Optional[AuthOutcome]:
        return self._outcome
    
    @property
    def running(self) -> bool:
        return self._run_flag.is_set()
    
    @property
    def events(self) -> EventQueue:
        return self._events
    
    @property
    def credentials(self) -> Credentials:
        return self._credentials
    
    # =========================================================================
    # Run loop
    # =========================================================================
    
    async def run(self) -> AuthOutcome:
        """
        Run until the state machine terminates.
        
        Returns:
            AuthOutcome describing how the run ended
        """
        if self._state is not LoginState.IDLE:
            raise RuntimeError(f"Cannot start from state {self._state.value}")
        
        self._run_flag.set()

        try:
            await self.step(Start())
            while self._run_flag.is_set():
                event = await self._events.get(self._config.poll_interval)
                if event is not None:
                    await self.step(event)
        finally:
            await self._session.disconnect()
        
        if self._outcome is None:
            self._outcome = AuthOutcome(TerminationReason.STOPPED)
        return self._outcome
    
    def stop(self):
        """Clears the run flag; the loop exits at the next iteration."""
        self._run_flag.clear()
    
    async def step(self, event: SessionEvent):
        """
        Process a single event.
        
        Args:
            event: Next event from the queue
        """
        if isinstance(event, Start):
            await self._on_start()
        elif isinstance(event, Connected):
            await self._on_connected()
        elif isinstance(event, Disconnected):
            await self._on_disconnected(event)
        elif isinstance(event, LoggedOn):
            await self._on_logged_on(event)
        elif isinstance(event, LoggedOff):
            logger.info(f"Logged off: {EResult.describe(event.result)}")
        elif isinstance(event, MachineAuthUpdate):
            await self._on_machine_auth_update(event)
        elif isinstance(event, TicketSettled):
            self._on_ticket_settled(event)
        else:
            raise TypeError(f"Unknown event: {event!r}")
    
    # =========================================================================
    # Transitions
    # =========================================================================
    
    def _transition(self, state: LoginState):
        logger.info(f"{self._state.value} -> {state.value}")
        self._state = state
        self.history.append(state)
    
    def _terminate(self, outcome: AuthOutcome):
        self._outcome = outcome
        self._transition(LoginState.TERMINATED)
        self._run_flag.clear()
    
    async def _on_start(self):
        if self._state is not LoginState.IDLE:
            logger.warning(f"Start ignored in state {self._state.value}")
            return
        self._transition(LoginState.CONNECTING)
        await self._session.connect()
    
    async def _on_connected(self):
        if self._state not in (LoginState.CONNECTING, LoginState.AWAITING_CHALLENGE_INPUT):
            logger.debug(f"Connected ignored in state {self._state.value}")
            return
        
        self._session.on_connected()
        logger.info(f"Connected! Logging in '{self._credentials.username}'...")
        
        try:
            sentry_hash = self._sentry.existing_hash()
        except SentryIOError as e:
            logger.warning(f"{e}; logging in without sentry hash")
            sentry_hash = None
        
        self._transition(LoginState.AWAITING_LOGIN_RESULT)
        await self._transport.log_on(LogOnDetails(
            username=self._credentials.username,
            password=self._credentials.password,
            auth_code=self._credentials.auth_code,
            two_factor_code=self._credentials.two_factor_code,
            sentry_file_hash=sentry_hash,
        ))
    
    async def _on_disconnected(self, event: Disconnected):
        if not self._run_flag.is_set() or self._state is LoginState.TERMINATED:
            return
        
        self._transition(LoginState.CONNECTING)
        await self._session.on_disconnected()
    
    async def _on_logged_on(self, event: LoggedOn):
        if self._state is not LoginState.AWAITING_LOGIN_RESULT:
            logger.warning(f"Login result ignored in state {self._state.value}")
            return
        
        kind = self._resolver.classify(event.result, event.email_domain)
        if kind.required:
            logger.info("This account is SteamGuard protected!")
            self._transition(LoginState.AWAITING_CHALLENGE_INPUT)
            
            response = await self._resolver.obtain(kind)
            if response.declined:
                self._terminate(AuthOutcome(
                    TerminationReason.CHALLENGE_DECLINED,
                    result=event.result
                ))
                return
            
            if kind.type is ChallengeType.EMAIL_CODE:
                self._credentials.auth_code = response.code
            else:
                self._credentials.two_factor_code = response.code
            return
        
        if event.result != EResult.OK:
            error = LoginFailedError(event.result, event.extended_result)
            logger.error(str(error))
            self._terminate(AuthOutcome(
                TerminationReason.LOGIN_FAILED,
                result=event.result,
                extended_result=event.extended_result,
                error=error
            ))
            return
        
        logger.info("Successfully logged on!")
        self._transition(LoginState.FETCHING_TICKET)
        await self.step(await self._fetch_ticket())
    
    async def _fetch_ticket(self) -> TicketSettled:
        app_id = self._config.app_id
        logger.info(f"GetAuthSessionTicket.. (AppID={app_id})")
        
        try:
            data = await asyncio.wait_for(
                self._transport.get_auth_session_ticket(app_id),
                self._config.ticket_timeout
            )
        except asyncio.TimeoutError:
            return TicketSettled(error=TicketError(
                f"Timed out after {self._config.ticket_timeout:g}s waiting for ticket"
            ))
        except Exception as e:
            return TicketSettled(error=e)
        
        return TicketSettled(ticket=data)
    
    def _on_ticket_settled(self, event: TicketSettled):
        if self._state is not LoginState.FETCHING_TICKET:
            logger.warning(f"Ticket result ignored in state {self._state.value}")
            return
        
        if event.error is not None or event.ticket is None:
            error = event.error or TicketError("Empty ticket")
            logger.error(f"Ticket request failed: {error}")
            self._terminate(AuthOutcome(TerminationReason.TICKET_FAILED, error=error))
            return
        
        ticket = Ticket(app_id=self._config.app_id, data=event.ticket)
        logger.info(f"Ticket received ({len(ticket.data)} bytes)")
        self._terminate(AuthOutcome(
            TerminationReason.TICKET_ISSUED,
            ticket=ticket,
            result=EResult.OK
        ))
    
    async def _on_machine_auth_update(self, event: MachineAuthUpdate):
        logger.info("Updating sentry file...")
        payload = event.payload
        
        try:
            written = self._sentry.apply_partial_write(event.offset, payload)
        except SentryIOError as e:
            logger.error(str(e))
            response = MachineAuthResponse(
                job_id=event.job_id,
                result=EResult.Fail,
                bytes_written=0,
                offset=event.offset,
                file_name=event.file_name,
                file_size=0,
                sentry_file_hash=None,
                one_time_password=event.one_time_password,
                last_error=e.errno or 0,
            )
        else:
            response = MachineAuthResponse(
                job_id=event.job_id,
                result=EResult.OK,
                bytes_written=len(payload),
                offset=event.offset,
                file_name=event.file_name,
                file_size=written.file_size,
                sentry_file_hash=written.sentry_hash,
                one_time_password=event.one_time_password,
            )
        
        await self._transport.send_machine_auth_response(response)
        logger.info("Sentry file update acknowledged")
