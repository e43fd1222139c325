"""
Timestamped backups of original subtitle files before they are removed.
"""
import glob
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

from .logging import get_logger


TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S";


class BackupManager:
    """
    Copies subtitle files into a backup directory before they are replaced.

    Backups are named ``<stem>.<ISO-8601 timestamp><suffix>`` and at most
    ``max_backups`` copies are kept per original file; the oldest are pruned.
    """

    def __init__( self, backup_dir: Path, max_backups: int = 25 ):
        self.logger = get_logger();
        self.backup_dir = Path( backup_dir );
        self.max_backups = max_backups;

    def get_backup_filename( self, original_file: Path, now: datetime = None ) -> str:
        """Build the backup file name for ``original_file``."""
        timestamp = ( now or datetime.now() ).strftime( TIMESTAMP_FORMAT );
        return f"{original_file.stem}.{timestamp}{original_file.suffix}";

    def get_existing_backups( self, original_file: Path ) -> List[Tuple[Path, datetime]]:
        """
        List existing backups of a file.

        Args:
            original_file: Path to the original file

        Returns:
            List of (backup_path, timestamp) tuples, oldest first
        """
        if not self.backup_dir.is_dir():
            return [];

        stem = original_file.stem;
        suffix = original_file.suffix;
        backup_pattern = f"{glob.escape( stem )}.????-??-??T??-??-??{glob.escape( suffix )}";

        backups = [];
        for backup_path in self.backup_dir.glob( backup_pattern ):
            timestamp_str = backup_path.name[ len( stem ) + 1 : len( backup_path.name ) - len( suffix ) ];
            try:
                timestamp = datetime.strptime( timestamp_str, TIMESTAMP_FORMAT );
            except ValueError:
                self.logger.debug( f"Skipping malformed backup file {backup_path}" );
                continue;
            backups.append( ( backup_path, timestamp ) );

        backups.sort( key=lambda item: item[1] );
        return backups;

    def apply_retention_policy( self, original_file: Path ):
        """Remove the oldest backups beyond ``max_backups``."""
        backups = self.get_existing_backups( original_file );
        if len( backups ) <= self.max_backups:
            return;

        backups_to_remove = backups[:-self.max_backups] if self.max_backups > 0 else backups;
        for backup_path, _ in backups_to_remove:
            backup_path.unlink();
            self.logger.debug( f"Removed old backup: {backup_path.name}" );

        self.logger.info( f"Removed {len( backups_to_remove )} old backup(s) of {original_file.name}" );

    def create_backup( self, file_path: Path ) -> Path:
        """
        Copy ``file_path`` into the backup directory and apply the retention policy.

        Args:
            file_path: File about to be modified or removed

        Returns:
            Path to the created backup

        Raises:
            FileNotFoundError: if ``file_path`` does not exist
        """
        file_path = Path( file_path );
        if not file_path.exists():
            raise FileNotFoundError( f"File to backup not found: {file_path}" );

        self.backup_dir.mkdir( parents=True, exist_ok=True );
        backup_path = self.backup_dir / self.get_backup_filename( file_path );

        shutil.copy2( file_path, backup_path );
        self.logger.debug( f"Created backup: {backup_path}" );

        self.apply_retention_policy( file_path );
        return backup_path;
