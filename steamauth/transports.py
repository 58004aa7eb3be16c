"""Loading session transports from import paths."""
import importlib

from .core.api.protocols import SessionTransport
from .core.exceptions import TransportError


def load_transport(path: str) -> SessionTransport:
    """
    Build a transport from ``module:factory``.
    
    The factory is called with no arguments and must return an object
    implementing SessionTransport.
    
    Raises:
        TransportError: If the path is malformed, the import fails or the
            result is not a transport
    """
    module_name, sep, attr = path.partition(':')
    if not sep or not module_name or not attr:
        raise TransportError(f"Transport must be given as 'module:factory', got {path!r}")
    
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TransportError(f"Cannot import transport module {module_name!r}: {e}") from e
    
    try:
        factory = getattr(module, attr)
    except AttributeError:
        raise TransportError(f"Module {module_name!r} has no attribute {attr!r}") from None
    
    transport = factory()
    if not isinstance(transport, SessionTransport):
        raise TransportError(f"{path} did not return a session transport")
    return transport
