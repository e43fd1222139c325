"""
CLI entry point for SubSync with argument parsing and environment configuration.
"""
import argparse
import sys
from pathlib import Path

from . import __version__
from .config import Config
from .logging import setup_logging
from .timecode import seconds_to_offset


class SubSyncCLI:
    """
    Command line interface for SubSync.

    Command line flags take precedence over SUBSYNC_* environment variables.
    """

    def __init__( self ):
        self.parser = self._create_parser();
        self.args = None;
        self.config = None;
        self.logger = None;
        self.offset_ms = None;

    def _create_parser( self ):
        """Create argument parser with all SubSync options."""
        parser = argparse.ArgumentParser(
            prog="subsync",
            description="Shift subtitle timestamps and rename subtitles to match their video files",
            epilog="Example: subsync ./season1 -5.43  (negative values make subtitles appear earlier). "
                   "Environment variables: SUBSYNC_DEBUG, SUBSYNC_LOG_DIR, SUBSYNC_LOG_FILE, SUBSYNC_BACKUP_DIR"
        );

        parser.add_argument(
            "folder",
            type=Path,
            help="Folder containing video (.mkv, .mp4, .avi) and subtitle (.srt, .ass) files"
        );

        parser.add_argument(
            "shift",
            type=float,
            help="Time shift in seconds, may be fractional or negative"
        );

        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be written without modifying any file"
        );

        parser.add_argument(
            "--backup",
            action="store_true",
            help="Copy each original subtitle to a backup folder before removing it"
        );

        parser.add_argument(
            "--backup-dir",
            type=Path,
            default=None,
            help="Backup folder, implies --backup (default: SUBSYNC_BACKUP_DIR or <folder>/backup)"
        );

        parser.add_argument(
            "--log-dir",
            type=Path,
            default=None,
            help="Folder for the rotating log file (default: SUBSYNC_LOG_DIR or ./logs)"
        );

        parser.add_argument(
            "--no-log-file",
            action="store_true",
            help="Log to the console only"
        );

        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug mode with verbose output"
        );

        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        );

        return parser;

    def _validate_arguments( self ):
        """Validate parsed arguments; returns a list of error messages."""
        errors = [];

        folder = self.args.folder;
        if not folder.exists() or not folder.is_dir():
            errors.append( f"'{folder}' is not a valid directory" );

        try:
            self.offset_ms = seconds_to_offset( self.args.shift );
        except ValueError as e:
            errors.append( str( e ) );

        return errors;

    def parse_args( self, argv=None ):
        """Parse command line arguments, set up logging and validate input."""
        self.args = self.parser.parse_args( argv );
        self.config = Config.from_env();

        debug = self.args.debug or self.config.debug;
        log_dir = None if self.args.no_log_file else ( self.args.log_dir or self.config.log_dir );
        self.logger = setup_logging( debug=debug, log_dir=log_dir );

        errors = self._validate_arguments();
        if errors:
            self.logger.error( "Usage errors:" );
            for error in errors:
                self.logger.error( f"  - {error}" );
            self.parser.print_usage( sys.stderr );
            sys.exit( 1 );

        self.logger.debug( f"SubSync v{__version__} starting..." );
        return self.args;

    @property
    def debug( self ) -> bool:
        return bool( self.args.debug or ( self.config and self.config.debug ) );

    def get_backup_dir( self ):
        """Resolve the backup folder, or None when backups are disabled."""
        if not ( self.args.backup or self.args.backup_dir ):
            return None;
        return self.args.backup_dir or self.config.backup_dir or self.args.folder / "backup";


def main( argv=None ):
    """Main entry point for the SubSync CLI."""
    cli = SubSyncCLI();
    args = cli.parse_args( argv );

    from .sync import FolderSynchronizer;

    synchronizer = FolderSynchronizer(
        folder=args.folder,
        offset_ms=cli.offset_ms,
        dry_run=args.dry_run,
        backup_dir=cli.get_backup_dir()
    );

    try:
        synchronizer.run();
    except KeyboardInterrupt:
        cli.logger.warning( "Interrupted by user" );
        sys.exit( 130 );
    except ( OSError, UnicodeDecodeError ) as e:
        cli.logger.error( f"Aborting: {e}" );
        if cli.debug:
            raise;
        sys.exit( 1 );

    cli.logger.info( "✓ All done!" );


if __name__ == "__main__":
    main();
