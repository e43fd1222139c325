"""
Episode number extraction and subtitle-to-video matching.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple


VIDEO_EXTENSIONS = frozenset( { "mkv", "mp4", "avi" } );
SUBTITLE_EXTENSIONS = frozenset( { "srt", "ass" } );

# Episode numbers are unsigned 32-bit; larger captures fall through to the next rule
MAX_EPISODE = 2 ** 32 - 1;

VIDEO = "video";
SUBTITLE = "subtitle";


@dataclass( frozen=True )
class EpisodePattern:
    """A named rule that captures an episode number from a file name."""

    name: str
    regex: "re.Pattern"

    def match( self, filename: str ) -> Optional[int]:
        found = self.regex.search( filename );
        if not found:
            return None;
        episode = int( found.group( 1 ) );
        return episode if episode <= MAX_EPISODE else None;


def _pattern( name: str, expression: str ) -> EpisodePattern:
    return EpisodePattern( name, re.compile( expression, re.IGNORECASE | re.ASCII ) );


# Priority order: the first rule that matches anywhere in the name wins
EPISODE_PATTERNS: Tuple[EpisodePattern, ...] = (
    _pattern( "e", r'e(\d+)' ),                              # S01E07, e07
    _pattern( "ep", r'ep(\d+)' ),                            # EP12
    _pattern( "episode", r'episode[_\s]*(\d+)' ),            # Episode 5, episode_05
    _pattern( "bare", r'[\s\-_](\d{2,3})(?:\.|$|[\s\-_])' ),  # Show - 003.mkv
);


@dataclass
class MediaFile:
    """A video or subtitle file with the episode number inferred from its name."""

    path: Path
    episode: int
    kind: str

    @property
    def extension( self ) -> str:
        return self.path.suffix.lower().lstrip( "." );


def extract_episode( filename: str, patterns: Iterable[EpisodePattern] = EPISODE_PATTERNS ) -> Optional[int]:
    """
    Extract an episode number from a file name.

    Args:
        filename: File name, extension included
        patterns: Ordered rules to try

    Returns:
        Episode number from the first matching rule, or None
    """
    for pattern in patterns:
        episode = pattern.match( filename );
        if episode is not None:
            return episode;
    return None;


def media_kind( path: Path ) -> Optional[str]:
    """Return VIDEO, SUBTITLE or None based on the file extension."""
    ext = Path( path ).suffix.lower().lstrip( "." );
    if ext in VIDEO_EXTENSIONS:
        return VIDEO;
    if ext in SUBTITLE_EXTENSIONS:
        return SUBTITLE;
    return None;


def classify( paths: Iterable[Path] ) -> Tuple[List[MediaFile], List[MediaFile]]:
    """
    Partition paths into videos and subtitles.

    Entries with an unknown extension or without an episode number are
    dropped. Input order is preserved within each list.

    Args:
        paths: Directory entries

    Returns:
        Tuple of (videos, subtitles)
    """
    videos = [];
    subtitles = [];

    for path in paths:
        path = Path( path );
        kind = media_kind( path );
        if kind is None:
            continue;

        episode = extract_episode( path.name );
        if episode is None:
            continue;

        media = MediaFile( path=path, episode=episode, kind=kind );
        if kind == VIDEO:
            videos.append( media );
        else:
            subtitles.append( media );

    return videos, subtitles;


def find_match( videos: Iterable[MediaFile], episode: int ) -> Optional[MediaFile]:
    """Return the first video with the given episode number, or None."""
    for video in videos:
        if video.episode == episode:
            return video;
    return None;
