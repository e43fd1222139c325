"""
Basic test cases for SubSync CLI functionality.
"""
import pytest
from pathlib import Path
from unittest.mock import patch
import sys
import os

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from subsync.cli import SubSyncCLI, main
from subsync.config import Config


@pytest.fixture( autouse=True )
def isolated_environment( tmp_path, monkeypatch ):
    """Run every test from an empty directory with no SUBSYNC_* settings."""
    monkeypatch.chdir( tmp_path );
    with patch.dict( os.environ, { "SUBSYNC_LOG_FILE": "0" }, clear=True ):
        yield;


class TestSubSyncCLI:
    """Test cases for SubSync CLI interface."""

    def test_cli_initialization( self ):
        """Test CLI object creation."""
        cli = SubSyncCLI();
        assert cli.parser is not None;
        assert cli.args is None;
        assert cli.logger is None;

    def test_missing_arguments( self ):
        cli = SubSyncCLI();
        with pytest.raises( SystemExit ) as exc_info:
            cli.parse_args( [] );
        assert exc_info.value.code != 0;

    def test_too_many_arguments( self, tmp_path ):
        cli = SubSyncCLI();
        with pytest.raises( SystemExit ) as exc_info:
            cli.parse_args( [ str( tmp_path ), "1.0", "extra" ] );
        assert exc_info.value.code != 0;

    def test_non_numeric_shift( self, tmp_path ):
        cli = SubSyncCLI();
        with pytest.raises( SystemExit ) as exc_info:
            cli.parse_args( [ str( tmp_path ), "abc" ] );
        assert exc_info.value.code != 0;

    def test_non_finite_shift( self, tmp_path ):
        cli = SubSyncCLI();
        with pytest.raises( SystemExit ) as exc_info:
            cli.parse_args( [ str( tmp_path ), "nan" ] );
        assert exc_info.value.code == 1;

    def test_invalid_directory( self, tmp_path ):
        cli = SubSyncCLI();
        with pytest.raises( SystemExit ) as exc_info:
            cli.parse_args( [ str( tmp_path / "missing" ), "1" ] );
        assert exc_info.value.code == 1;

    def test_file_is_not_a_directory( self, tmp_path ):
        target = tmp_path / "Show - 01.srt";
        target.write_text( "", encoding="utf-8" );

        cli = SubSyncCLI();
        with pytest.raises( SystemExit ):
            cli.parse_args( [ str( target ), "1" ] );

    def test_negative_fractional_shift( self, tmp_path ):
        cli = SubSyncCLI();
        args = cli.parse_args( [ str( tmp_path ), "-5.43" ] );

        assert args.folder == tmp_path;
        assert args.shift == -5.43;
        assert cli.offset_ms == -5430;
        assert args.dry_run == False;

    def test_backup_dir_resolution( self, tmp_path ):
        cli = SubSyncCLI();
        cli.parse_args( [ str( tmp_path ), "1" ] );
        assert cli.get_backup_dir() is None;

        cli.parse_args( [ str( tmp_path ), "1", "--backup" ] );
        assert cli.get_backup_dir() == tmp_path / "backup";

        cli.parse_args( [ str( tmp_path ), "1", "--backup", "--backup-dir", str( tmp_path / "bk" ) ] );
        assert cli.get_backup_dir() == tmp_path / "bk";

    def test_backup_dir_implies_backup( self, tmp_path ):
        cli = SubSyncCLI();
        cli.parse_args( [ str( tmp_path ), "1", "--backup-dir", str( tmp_path / "bk" ) ] );
        assert cli.get_backup_dir() == tmp_path / "bk";

    def test_log_dir_created_when_enabled( self, tmp_path ):
        cli = SubSyncCLI();
        cli.parse_args( [ str( tmp_path ), "1", "--log-dir", str( tmp_path / "mylogs" ) ] );
        assert ( tmp_path / "mylogs" / "subsync.log" ).exists();


class TestMain:
    """Full runs through the entry point."""

    def test_shift_and_rename( self, tmp_path ):
        ( tmp_path / "Show - 003.mkv" ).write_bytes( b"" );
        ( tmp_path / "Show - 003.srt" ).write_bytes( b"1\n00:00:03,000 --> 00:00:10,000\nHello\n" );
        ( tmp_path / "Other - 009.srt" ).write_bytes( b"1\n00:00:03,000 --> 00:00:10,000\nHello\n" );

        main( [ str( tmp_path ), "-5.43" ] );

        assert ( tmp_path / "Show - 003.srt" ).read_bytes() == b"1\n00:00:00,000 --> 00:00:04,570\nHello\n";
        assert not ( tmp_path / "Other - 009.srt" ).exists();
        assert ( tmp_path / "shifted_Other - 009.srt" ).read_bytes() == b"1\n00:00:00,000 --> 00:00:04,570\nHello\n";

    def test_io_error_exits_non_zero( self, tmp_path ):
        ( tmp_path / "Show - 01.srt" ).write_bytes( b"\xff\xfe" );

        with pytest.raises( SystemExit ) as exc_info:
            main( [ str( tmp_path ), "1" ] );
        assert exc_info.value.code == 1;

    def test_io_error_reraised_in_debug( self, tmp_path ):
        ( tmp_path / "Show - 01.srt" ).write_bytes( b"\xff\xfe" );

        with pytest.raises( UnicodeDecodeError ):
            main( [ str( tmp_path ), "1", "--debug" ] );

    def test_interrupt_exit_code( self, tmp_path ):
        with patch( "subsync.sync.FolderSynchronizer.run", side_effect=KeyboardInterrupt ):
            with pytest.raises( SystemExit ) as exc_info:
                main( [ str( tmp_path ), "1" ] );
        assert exc_info.value.code == 130;


class TestConfig:
    """Environment configuration."""

    def test_defaults( self ):
        with patch.dict( os.environ, {}, clear=True ):
            config = Config.from_env();
        assert config.debug == False;
        assert config.log_dir == Path( "logs" );
        assert config.backup_dir is None;

    def test_environment_variables( self ):
        with patch.dict( os.environ, {
            "SUBSYNC_DEBUG": "yes",
            "SUBSYNC_LOG_DIR": "/tmp/subsync-logs",
            "SUBSYNC_BACKUP_DIR": "/tmp/subsync-backup"
        }, clear=True ):
            config = Config.from_env();

        assert config.debug == True;
        assert config.log_dir == Path( "/tmp/subsync-logs" );
        assert config.backup_dir == Path( "/tmp/subsync-backup" );

    def test_log_file_disabled( self ):
        config = Config.from_env();
        assert config.log_dir is None;

    def test_dotenv_file( self, tmp_path ):
        env_file = tmp_path / "custom.env";
        env_file.write_text( "SUBSYNC_DEBUG=1\nSUBSYNC_BACKUP_DIR=saved\n", encoding="utf-8" );

        with patch.dict( os.environ, {}, clear=True ):
            config = Config.from_env( env_file );

        assert config.debug == True;
        assert config.backup_dir == Path( "saved" );

    def test_debug_from_environment_reaches_cli( self, tmp_path ):
        with patch.dict( os.environ, { "SUBSYNC_DEBUG": "1" } ):
            cli = SubSyncCLI();
            cli.parse_args( [ str( tmp_path ), "1" ] );
        assert cli.debug == True;
