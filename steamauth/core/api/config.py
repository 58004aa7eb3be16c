"""
Client configuration module.

Loads the KEY=VALUE configuration file and merges command-line overrides.
"""
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union

from ..exceptions import ConfigurationError
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = 'SteamKitAuthConfig.txt'

APP_ID_PATTERN = re.compile(r'\+?[0-9]+')


def parse_app_id(value: str) -> int:
    """Parses an unsigned app id; anything unparseable becomes 0."""
    value = value.strip()
    if not APP_ID_PATTERN.fullmatch(value):
        return 0
    app_id = int(value)
    return app_id if 0 <= app_id <= 0xFFFFFFFF else 0


@dataclass
class AuthConfig:
    """
    Complete client configuration.
    
    Attributes:
        username: Account name
        password: Account password
        app_id: Application the ticket is requested for
        no_2fa: Decline interactive challenges instead of prompting
        sentry_dir: Directory holding per-account sentry files
        reconnect_delay: Seconds to wait before reconnecting
        poll_interval: Seconds the control loop waits for an event
        ticket_timeout: Seconds to wait for a ticket before giving up
        transport: Import path ``module:factory`` of the session transport
    """
    username: Optional[str] = None
    password: Optional[str] = None
    app_id: int = 0
    no_2fa: bool = False
    sentry_dir: Path = Path('.')
    reconnect_delay: float = 5.0
    poll_interval: float = 1.0
    ticket_timeout: float = 30.0
    transport: Optional[str] = None
    
    def __repr__(self) -> str:
        return (
            f"AuthConfig(username={self.username!r}, app_id={self.app_id}, "
            f"no_2fa={self.no_2fa}, sentry_dir={str(self.sentry_dir)!r})"
        )
    
    @classmethod
    def from_file(cls, path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> 'AuthConfig':
        """
        Load configuration from a KEY=VALUE file.
        
        Lines without '=' are skipped and unknown keys are ignored.
        A missing file yields the defaults.
        
        Args:
            path: Configuration file path
            
        Returns:
            AuthConfig instance
        """
        config = cls()
        path = Path(path)
        if not path.exists():
            logger.debug(f"No config file at {path}")
            return config
        
        try:
            text = path.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
        
        for line in text.splitlines():
            key, sep, value = line.partition('=')
            if not sep:
                continue
            
            if key == 'USERNAME':
                config.username = value
            elif key == 'PASSWORD':
                config.password = value
            elif key == 'APPID':
                config.app_id = parse_app_id(value)
            elif key == 'TRANSPORT':
                config.transport = value
        
        return config
    
    def merged(self, **overrides) -> 'AuthConfig':
        """
        Return a copy with every non-None override applied.
        
        Raises:
            ConfigurationError: On an unknown option name
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
    
    def validate(self) -> 'AuthConfig':
        """Checks that credentials are present."""
        if not self.username:
            raise ConfigurationError("No username configured (USERNAME or --username)")
        if not self.password:
            raise ConfigurationError("No password configured (PASSWORD or --password)")
        return self
    
    @property
    def sentry_path(self) -> Path:
        """Sentry file for the configured account."""
        from ..sentry import sentry_path_for
        
        return sentry_path_for(self.username or '', self.sentry_dir)
