"""
Time code parsing and formatting for SubRip (.srt) and SubStation Alpha (.ass) subtitles.

SRT time codes carry milliseconds (HH:MM:SS,mmm), ASS time codes carry
centiseconds (H:MM:SS.cc). Both are handled internally as integer milliseconds.
"""
import math
import re
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from .errors import TimeCodeError


MS_PER_HOUR = 3600000;
MS_PER_MINUTE = 60000;
MS_PER_SECOND = 1000;

_FIELD_RE = re.compile( r'[0-9]+' );
_SRT_SPLIT_RE = re.compile( r'[:,]' );
_ASS_SPLIT_RE = re.compile( r'[:.]' );


def _parse_fields( text: str, splitter ) -> List[int]:
    """
    Split a time code into exactly four non-negative integer fields.

    Args:
        text: Raw time code text
        splitter: Compiled pattern matching the field separators

    Returns:
        List of [hours, minutes, seconds, fraction]
    """
    parts = splitter.split( text );
    if len( parts ) != 4:
        raise TimeCodeError( f"Expected 4 time fields, got {len( parts )}: {text!r}" );

    fields = [];
    for part in parts:
        if not _FIELD_RE.fullmatch( part ):
            raise TimeCodeError( f"Invalid time field {part!r} in {text!r}" );
        fields.append( int( part ) );

    return fields;


def _split_ms( ms: int ):
    """Decompose milliseconds into (hours, minutes, seconds, milliseconds)."""
    if ms < 0:
        raise TimeCodeError( f"Cannot format negative time: {ms} ms" );

    hours = ms // MS_PER_HOUR;
    minutes = ( ms % MS_PER_HOUR ) // MS_PER_MINUTE;
    seconds = ( ms % MS_PER_MINUTE ) // MS_PER_SECOND;
    millis = ms % MS_PER_SECOND;
    return hours, minutes, seconds, millis;


def parse_srt_timestamp( text: str ) -> int:
    """
    Parse an SRT time code into milliseconds.

    Field ranges are not validated, so "00:75:00,000" is accepted as 75 minutes.

    Args:
        text: Time code like "00:01:23,456"

    Returns:
        Milliseconds since track start

    Raises:
        TimeCodeError: if the text does not have four integer fields
    """
    hours, minutes, seconds, millis = _parse_fields( text, _SRT_SPLIT_RE );
    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + millis;


def parse_ass_timestamp( text: str ) -> int:
    """
    Parse an ASS time code into milliseconds.

    Args:
        text: Time code like "0:01:23.45" (fraction is centiseconds)

    Returns:
        Milliseconds since track start

    Raises:
        TimeCodeError: if the text does not have four integer fields
    """
    hours, minutes, seconds, centis = _parse_fields( text, _ASS_SPLIT_RE );
    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + centis * 10;


def format_srt_timestamp( ms: int ) -> str:
    """Format milliseconds as an SRT time code (HH:MM:SS,mmm)."""
    hours, minutes, seconds, millis = _split_ms( ms );
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}";


def format_ass_timestamp( ms: int ) -> str:
    """Format milliseconds as an ASS time code (H:MM:SS.cc), truncating to centiseconds."""
    hours, minutes, seconds, millis = _split_ms( ms );
    return f"{hours}:{minutes:02d}:{seconds:02d}.{millis // 10:02d}";


def shift_timestamp( ms: int, offset_ms: int ) -> int:
    """Apply a signed offset, clamping the result at zero."""
    return max( 0, ms + offset_ms );


def seconds_to_offset( seconds: float ) -> int:
    """
    Convert a user supplied shift in seconds to whole milliseconds.

    The value is multiplied by 1000 and truncated toward zero.

    Raises:
        ValueError: for NaN or infinite values
    """
    if not math.isfinite( seconds ):
        raise ValueError( f"Shift must be a finite number of seconds, got {seconds}" );
    return int( seconds * 1000 );


class SubtitleFormat( Enum ):
    """Supported subtitle formats, each bound to its time code codec."""

    SRT = "srt"
    ASS = "ass"

    @property
    def parser( self ) -> Callable[[str], int]:
        return _CODECS[self][0];

    @property
    def formatter( self ) -> Callable[[int], str]:
        return _CODECS[self][1];

    def parse( self, text: str ) -> int:
        return self.parser( text );

    def format( self, ms: int ) -> str:
        return self.formatter( ms );

    @classmethod
    def from_extension( cls, extension: str ) -> Optional["SubtitleFormat"]:
        """
        Look up a format by file extension.

        Args:
            extension: Extension with or without the leading dot, any case

        Returns:
            Matching SubtitleFormat, or None for unsupported extensions
        """
        ext = extension.lower().lstrip( "." );
        for fmt in cls:
            if fmt.value == ext:
                return fmt;
        return None;

    @classmethod
    def from_path( cls, path: Path ) -> Optional["SubtitleFormat"]:
        return cls.from_extension( Path( path ).suffix );


_CODECS = {
    SubtitleFormat.SRT: ( parse_srt_timestamp, format_srt_timestamp ),
    SubtitleFormat.ASS: ( parse_ass_timestamp, format_ass_timestamp ),
};
