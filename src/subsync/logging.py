"""
Logging system for SubSync with Rich console output and an optional rotating log file.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler


MAX_LOG_BYTES = 5 * 1024 * 1024;  # 5MB
LOG_BACKUP_COUNT = 5;


class SubSyncLogger:
    """
    Logger for SubSync runs.

    Features:
    - Rich console output with colors
    - Optional file logging with 5MB rotation
    - INFO default, DEBUG with --debug
    """

    def __init__( self, name: str = "subsync", debug: bool = False, log_dir: Optional[Path] = None ):
        self.name = name;
        self.debug_mode = debug;
        self.console = Console( stderr=True );
        self.log_file = None;

        if log_dir is not None:
            log_dir = Path( log_dir );
            log_dir.mkdir( parents=True, exist_ok=True );
            self.log_file = log_dir / f"{name}.log";

        self.logger = self._setup_logger();

    def _setup_logger( self ):
        """Setup logger with Rich console and, if configured, file handlers."""
        logger = logging.getLogger( self.name );
        logger.setLevel( logging.DEBUG if self.debug_mode else logging.INFO );
        logger.propagate = False;

        for handler in list( logger.handlers ):
            logger.removeHandler( handler );
            handler.close();

        console_handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=self.debug_mode
        );
        console_handler.setLevel( logging.DEBUG if self.debug_mode else logging.INFO );
        console_handler.setFormatter( logging.Formatter( "%(message)s" ) );
        logger.addHandler( console_handler );

        if self.log_file is not None:
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8"
            );
            file_handler.setLevel( logging.DEBUG );
            file_handler.setFormatter( logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ) );
            logger.addHandler( file_handler );

        return logger;

    def debug( self, message, **kwargs ):
        self.logger.debug( message, **kwargs );

    def info( self, message, **kwargs ):
        self.logger.info( message, **kwargs );

    def warning( self, message, **kwargs ):
        self.logger.warning( message, **kwargs );

    def error( self, message, **kwargs ):
        self.logger.error( message, **kwargs );


# Global logger instance
_logger = None;


def get_logger( debug: bool = False ) -> SubSyncLogger:
    """Get the global SubSync logger, creating a console-only one on first use."""
    global _logger;
    if _logger is None:
        _logger = SubSyncLogger( debug=debug );
    return _logger;


def setup_logging( debug: bool = False, log_dir: Optional[Path] = None ) -> SubSyncLogger:
    """(Re)configure the global logger for a run."""
    global _logger;
    _logger = SubSyncLogger( debug=debug, log_dir=log_dir );
    return _logger;
