"""
Line-oriented timestamp rewriting for subtitle documents.
"""
import re
from typing import List

from .errors import TimeCodeError
from .timecode import SubtitleFormat, shift_timestamp


SRT_ARROW = " --> ";

# Dialogue: <layer>,<start>,<end>,<rest>
ASS_DIALOGUE_RE = re.compile(
    r'^(Dialogue: \d+,)(\d+:\d+:\d+\.\d+),(\d+:\d+:\d+\.\d+),(.+)$',
    re.ASCII
);


def split_lines( content: str ) -> List[str]:
    """
    Split text into lines on newlines.

    A trailing carriage return is removed from every line and a final
    newline does not produce an extra empty line.
    """
    if not content:
        return [];

    lines = content.split( "\n" );
    if lines[-1] == "":
        lines.pop();

    return [ line[:-1] if line.endswith( "\r" ) else line for line in lines ];


class LineRewriter:
    """
    Shift every time code of a subtitle document by a fixed offset.

    Lines are rewritten one at a time. Lines that carry no time code, or whose
    time codes fail to parse, are emitted unchanged.
    """

    def __init__( self, fmt: SubtitleFormat, offset_ms: int ):
        self.format = fmt;
        self.offset_ms = offset_ms;
        self.shifted_lines = 0;
        self._handler = self._rewrite_srt if fmt is SubtitleFormat.SRT else self._rewrite_ass;

    def _shift( self, ms: int ) -> str:
        return self.format.format( shift_timestamp( ms, self.offset_ms ) );

    def _rewrite_srt( self, line: str ):
        if SRT_ARROW not in line:
            return None;

        fields = line.split( SRT_ARROW );
        if len( fields ) != 2:
            return None;

        start, end = ( self.format.parse( field ) for field in fields );
        return f"{self._shift( start )}{SRT_ARROW}{self._shift( end )}";

    def _rewrite_ass( self, line: str ):
        match = ASS_DIALOGUE_RE.match( line );
        if not match:
            return None;

        prefix, start_text, end_text, rest = match.groups();
        start = self.format.parse( start_text );
        end = self.format.parse( end_text );
        return f"{prefix}{self._shift( start )},{self._shift( end )},{rest}";

    def rewrite_line( self, line: str ) -> str:
        """
        Rewrite a single line without its line terminator.

        Args:
            line: One line of the document

        Returns:
            The shifted line, or the original line if it holds no valid time codes
        """
        try:
            rewritten = self._handler( line );
        except TimeCodeError:
            return line;

        if rewritten is None:
            return line;

        self.shifted_lines += 1;
        return rewritten;

    def rewrite( self, content: str ) -> str:
        """
        Rewrite a whole document.

        Every output line, the last included, ends with a newline.

        Args:
            content: Full subtitle file text

        Returns:
            Shifted document text
        """
        self.shifted_lines = 0;
        return "".join( self.rewrite_line( line ) + "\n" for line in split_lines( content ) );


def shift_document( content: str, offset_ms: int, fmt: SubtitleFormat ) -> str:
    """Shift all time codes in ``content`` by ``offset_ms`` milliseconds."""
    return LineRewriter( fmt, offset_ms ).rewrite( content );
