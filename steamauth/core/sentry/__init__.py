"""
Sentry file module.

Persists the per-account machine-auth credential that lets the remote
network recognise this device.
"""
from .store import SentryStore, SentryWriteResult, sentry_path_for

__all__ = [
    'SentryStore',
    'SentryWriteResult',
    'sentry_path_for',
]
