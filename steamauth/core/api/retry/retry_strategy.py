"""Reconnect strategies using Strategy Pattern."""
import asyncio
from abc import ABC, abstractmethod


class ReconnectStrategy(ABC):
    """Abstract reconnect strategy."""
    
    @abstractmethod
    def delay(self, attempt: int) -> float:
        """Seconds to wait before the given reconnect attempt (0-based)."""
        pass
    
    async def wait(self, attempt: int):
        """Waits before reconnecting."""
        await asyncio.sleep(self.delay(attempt))


class FixedDelayStrategy(ReconnectStrategy):
    """Waits the same interval before every reconnect."""
    
    def __init__(self, seconds: float = 5.0):
        self.seconds = seconds
    
    def delay(self, attempt: int) -> float:
        return self.seconds


class ExponentialBackoffStrategy(ReconnectStrategy):
    """Exponential backoff, capped at max_delay."""
    
    def __init__(self, base_delay: float = 5.0, max_delay: float = 300.0,
                 exponential_base: float = 2.0):
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
    
    def delay(self, attempt: int) -> float:
        """Waits with exponential backoff."""
        return min(self.base_delay * (self.exponential_base ** attempt), self.max_delay)
