"""Configuration loaded from the environment and an optional .env file."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


_TRUTHY = { "1", "true", "yes", "on" };


def _env_flag( name: str, default: bool ) -> bool:
    value = os.getenv( name );
    if value is None or value.strip() == "":
        return default;
    return value.strip().lower() in _TRUTHY;


@dataclass
class Config:
    """Run configuration. Command line flags override these values."""

    debug: bool = False
    log_dir: Optional[Path] = Path( "logs" )
    backup_dir: Optional[Path] = None

    @classmethod
    def from_env( cls, env_file: Optional[Path] = None ) -> "Config":
        """
        Load configuration from SUBSYNC_* environment variables.

        SUBSYNC_LOG_FILE=0 disables the log file entirely.
        """
        env_file = Path( env_file ) if env_file else Path( ".env" );
        if env_file.exists():
            load_dotenv( env_file );

        log_dir = None;
        if _env_flag( "SUBSYNC_LOG_FILE", True ):
            log_dir = Path( os.getenv( "SUBSYNC_LOG_DIR" ) or "logs" );

        backup_dir = os.getenv( "SUBSYNC_BACKUP_DIR" );

        return cls(
            debug=_env_flag( "SUBSYNC_DEBUG", False ),
            log_dir=log_dir,
            backup_dir=Path( backup_dir ) if backup_dir else None,
        );
