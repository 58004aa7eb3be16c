"""Session lifecycle and reconnect policy."""
import asyncio
from typing import Optional

from .api.protocols import SessionTransport
from .api.retry import ReconnectStrategy, FixedDelayStrategy
from .logging import get_logger

logger = get_logger(__name__)


class SessionController:
    """
    Owns connect/disconnect against the session transport.
    
    An unsolicited disconnect while running waits for the reconnect strategy
    and connects again. The wait runs on the control loop, so there is never
    more than one reconnect in progress.
    """
    
    def __init__(
        self,
        transport: SessionTransport,
        run_flag: asyncio.Event,
        strategy: Optional[ReconnectStrategy] = None
    ):
        self._transport = transport
        self._run_flag = run_flag
        self._strategy = strategy or FixedDelayStrategy()
        self._attempt = 0
    
    @property
    def reconnect_attempts(self) -> int:
        return self._attempt
    
    async def connect(self):
        """Starts connecting; completion arrives as a Connected event."""
        logger.info("Connecting...")
        await self._transport.connect()
    
    async def disconnect(self):
        logger.info("Disconnecting")
        await self._transport.disconnect()
    
    def on_connected(self):
        """Resets the reconnect attempt counter."""
        self._attempt = 0
    
    async def on_disconnected(self) -> bool:
        """
        Handles an unsolicited disconnect.
        
        Returns:
            True if a reconnect was started, False if the run is stopping
        """
        if not self._run_flag.is_set():
            logger.debug("Disconnected after shutdown, not reconnecting")
            return False
        
        delay = self._strategy.delay(self._attempt)
        logger.info(f"Disconnected, reconnecting in {delay:g}s...")
        await self._strategy.wait(self._attempt)
        self._attempt += 1
        
        if not self._run_flag.is_set():
            return False
        
        await self.connect()
        return True
