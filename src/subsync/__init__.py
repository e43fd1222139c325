"""
SubSync - Subtitle synchronization and batch renaming utility.

Shifts subtitle timestamps by a fixed offset and renames subtitle files
to match the video file that shares their episode number.
"""

__version__ = "0.1.0";
__author__ = "SubSync Project";
__license__ = "MIT";
