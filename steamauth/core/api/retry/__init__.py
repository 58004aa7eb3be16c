"""Reconnect strategies using Strategy Pattern."""
from .retry_strategy import ReconnectStrategy, FixedDelayStrategy, ExponentialBackoffStrategy

__all__ = [
    'ReconnectStrategy',
    'FixedDelayStrategy',
    'ExponentialBackoffStrategy',
]
