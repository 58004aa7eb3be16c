"""
Sentry (machine-auth) file storage.

The remote network hands a device credential to the client in
offset-addressed chunks. Every write is followed by a hash over the whole
file, so the reported hash always matches what is on disk.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from Crypto.Hash import SHA1

from ..exceptions import SentryIOError
from ..logging import get_logger

logger = get_logger(__name__)

HASH_BLOCK_SIZE = 64 * 1024


def sentry_path_for(username: str, directory: Union[str, Path] = '.') -> Path:
    """Sentry file path for an account: ``<directory>/sentry-<username>.bin``."""
    return Path(directory) / f"sentry-{username}.bin"


def _hash_stream(stream) -> bytes:
    sha1 = SHA1.new()
    for block in iter(lambda: stream.read(HASH_BLOCK_SIZE), b''):
        sha1.update(block)
    return sha1.digest()


@dataclass(frozen=True)
class SentryWriteResult:
    """Size and SHA-1 of the sentry file after a write."""
    file_size: int
    sentry_hash: bytes


class SentryStore:
    """
    Per-account sentry file.
    
    The file holds raw device-authentication bytes only; the hash is
    recomputed from content on every call and never cached.
    
    Example:
        >>> store = SentryStore.for_account("alice", "/var/lib/steamauth")
        >>> result = store.apply_partial_write(0, chunk)
        >>> store.existing_hash() == result.sentry_hash
        True
    """
    
    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.
        
        Args:
            path: Sentry file path (created lazily on first write)
        """
        self.path = Path(path)
    
    @classmethod
    def for_account(cls, username: str, directory: Union[str, Path] = '.') -> 'SentryStore':
        """Create the store for an account's sentry file."""
        return cls(sentry_path_for(username, directory))
    
    def exists(self) -> bool:
        return self.path.is_file()
    
    def apply_partial_write(self, offset: int, data: bytes) -> SentryWriteResult:
        """
        Write ``data`` at ``offset`` and hash the entire file.
        
        The file is created if absent and sparsely extended when ``offset``
        lies past its end. Writing the same chunk twice gives the same result.
        
        Args:
            offset: Byte offset to write at
            data: Bytes to write
            
        Returns:
            SentryWriteResult with the new file size and full-file SHA-1
            
        Raises:
            SentryIOError: If the file cannot be opened, written or flushed
        """
        if offset < 0:
            raise SentryIOError(f"Negative sentry offset {offset}", path=str(self.path))
        
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o600)
            with open(fd, 'r+b') as stream:
                stream.seek(offset)
                stream.write(data)
                stream.flush()
                os.fsync(stream.fileno())
                
                file_size = stream.seek(0, os.SEEK_END)
                stream.seek(0)
                sentry_hash = _hash_stream(stream)
        except OSError as e:
            raise SentryIOError(
                f"Cannot write sentry file {self.path}: {e.strerror or e}",
                path=str(self.path),
                errno=e.errno
            ) from e
        
        logger.debug(f"Sentry write at {offset}: {len(data)} bytes, size now {file_size}")
        return SentryWriteResult(file_size=file_size, sentry_hash=sentry_hash)
    
    def existing_hash(self) -> Optional[bytes]:
        """
        SHA-1 of the current file contents.
        
        Returns:
            Digest if the file exists, None otherwise
            
        Raises:
            SentryIOError: If the file exists but cannot be read
        """
        try:
            with open(self.path, 'rb') as stream:
                return _hash_stream(stream)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SentryIOError(
                f"Cannot read sentry file {self.path}: {e.strerror or e}",
                path=str(self.path),
                errno=e.errno
            ) from e
