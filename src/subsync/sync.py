"""
Folder synchronizer: shifts every subtitle in a folder and renames it after its video.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set, Tuple

from .backup import BackupManager
from .episodes import MediaFile, classify, find_match
from .logging import get_logger
from .rewriter import LineRewriter
from .timecode import SubtitleFormat


UNMATCHED_PREFIX = "shifted_";


@dataclass
class SyncOutcome:
    """What happened to one subtitle file."""

    source: Path
    destination: Path
    video: Optional[MediaFile]
    shifted_lines: int
    renamed: bool = True
    redirected: bool = False

    @property
    def matched( self ) -> bool:
        return self.video is not None;


def read_subtitle( path: Path ) -> str:
    """Read a subtitle file as UTF-8 without newline translation."""
    with open( path, "r", encoding="utf-8", newline="" ) as f:
        return f.read();


def write_subtitle( path: Path, content: str ):
    """Write subtitle text as UTF-8 with LF line endings."""
    with open( path, "w", encoding="utf-8", newline="\n" ) as f:
        f.write( content );


def _same_file( source: Path, destination: Path ) -> bool:
    if source == destination:
        return True;
    return destination.exists() and destination.samefile( source );


class FolderSynchronizer:
    """
    Shift and rename all subtitle files in a single folder.

    Orchestrates:
    1. Non-recursive folder scan, sorted by file name
    2. Video/subtitle classification by extension and episode number
    3. Timestamp shifting of each subtitle
    4. Writing the result next to its video, or as shifted_<name> if unmatched
    5. Removing the original subtitle

    Any I/O error aborts the run; files already processed are left as they are.
    """

    def __init__(
        self,
        folder: Path,
        offset_ms: int,
        dry_run: bool = False,
        backup_dir: Optional[Path] = None
    ):
        self.folder = Path( folder );
        self.offset_ms = offset_ms;
        self.dry_run = dry_run;
        self.backup_manager = BackupManager( backup_dir ) if backup_dir is not None else None;

        self.logger = get_logger();
        self.videos: List[MediaFile] = [];
        self.subtitles: List[MediaFile] = [];
        self.pending: Set[Path] = set();
        self.claimed: Set[Path] = set();

    def scan( self ) -> Tuple[List[MediaFile], List[MediaFile]]:
        """
        Classify the regular files directly inside the folder.

        Entries are sorted by name so that duplicate episode numbers always
        resolve to the same video.

        Returns:
            Tuple of (videos, subtitles)
        """
        entries = sorted( ( entry for entry in self.folder.iterdir() if entry.is_file() ), key=lambda p: p.name );
        self.videos, self.subtitles = classify( entries );

        kept = { media.path for media in self.videos + self.subtitles };
        for entry in entries:
            if entry not in kept:
                self.logger.debug( f"Skipping {entry.name}" );

        self.logger.info( f"Found {len( self.videos )} video files" );
        self.logger.info( f"Found {len( self.subtitles )} subtitle files" );
        return self.videos, self.subtitles;

    def destination_for( self, subtitle: MediaFile, video: Optional[MediaFile] ) -> Path:
        """
        Work out where the shifted subtitle goes.

        Args:
            subtitle: Subtitle being processed
            video: Matching video, or None

        Returns:
            ``<video stem>.<ext>`` next to the video, or ``shifted_<name>``
        """
        if video is not None:
            return self.folder / f"{video.path.stem}.{subtitle.extension}";
        return self.folder / f"{UNMATCHED_PREFIX}{subtitle.path.name}";

    def _collides( self, subtitle: MediaFile, destination: Path ) -> bool:
        """True if writing ``destination`` would clobber output of this run or an unprocessed subtitle."""
        if _same_file( subtitle.path, destination ):
            return False;
        return destination in self.claimed or destination in self.pending;

    def process_subtitle( self, subtitle: MediaFile ) -> SyncOutcome:
        """Shift one subtitle file, write it to its destination and remove the original."""
        self.logger.info( f"Processing: {subtitle.path.name}" );

        fmt = SubtitleFormat.from_path( subtitle.path );
        rewriter = LineRewriter( fmt, self.offset_ms );
        shifted = rewriter.rewrite( read_subtitle( subtitle.path ) );
        self.logger.debug( f"  Shifted {rewriter.shifted_lines} timestamp lines" );

        video = find_match( self.videos, subtitle.episode );
        destination = self.destination_for( subtitle, video );
        redirected = False;
        if self._collides( subtitle, destination ):
            self.logger.warning( f"  {destination.name} is already taken in this run, keeping {subtitle.path.name} apart" );
            destination = self.destination_for( subtitle, None );
            redirected = True;
            if self._collides( subtitle, destination ):
                raise FileExistsError( f"No free destination for {subtitle.path.name}: {destination.name} is already taken" );

        self.pending.discard( subtitle.path );
        self.claimed.add( destination );
        outcome = SyncOutcome(
            source=subtitle.path,
            destination=destination,
            video=video,
            shifted_lines=rewriter.shifted_lines,
            renamed=not _same_file( subtitle.path, destination ),
            redirected=redirected
        );

        if outcome.renamed and destination.exists():
            self.logger.warning( f"  Overwriting existing file: {destination.name}" );

        if self.dry_run:
            self.logger.info( f"  Dry run: would write {destination.name}" );
            return outcome;

        if self.backup_manager is not None:
            self.backup_manager.create_backup( subtitle.path );

        write_subtitle( destination, shifted );
        if outcome.renamed:
            subtitle.path.unlink();

        if redirected:
            self.logger.info( f"  ✓ Shifted (destination taken): {destination.name}" );
        elif video is not None:
            self.logger.info( f"  ✓ Shifted and renamed to: {destination.name}" );
        else:
            self.logger.info( f"  ✓ Shifted (no matching video found): {destination.name}" );

        return outcome;

    def run( self ) -> List[SyncOutcome]:
        """
        Process every subtitle in the folder.

        Returns:
            One SyncOutcome per subtitle, in processing order
        """
        self.logger.info( f"Scanning folder: {self.folder}" );
        self.logger.info( f"Time shift: {self.offset_ms / 1000:g} seconds ({self.offset_ms} ms)" );

        self.scan();
        self.pending = { subtitle.path for subtitle in self.subtitles };
        self.claimed = set();

        outcomes = [ self.process_subtitle( subtitle ) for subtitle in self.subtitles ];

        matched = sum( 1 for outcome in outcomes if outcome.matched );
        self.logger.info( f"Processed {len( outcomes )} subtitle files ({matched} matched to a video)" );
        return outcomes;
