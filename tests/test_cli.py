"""
CLI tests: argument parsing, configuration building, output format and exit codes.
"""
import sys
from unittest import mock

import pytest

from samebytes.cli import CLIApplication, main
from samebytes.core.errors import ConfigurationError


class TestArgumentParsing:
    """Test CLI argument parsing with argparse."""

    def test_include_dir_is_repeatable(self):
        args = CLIApplication.parse_args(["--include-dir", "/a", "-i", "/b"])
        assert args.include_dirs == ["/a", "/b"]

    def test_exclude_dir_is_repeatable(self):
        args = CLIApplication.parse_args(["-i", "/a", "--exclude-dir", "/a/x", "-e", "/a/y"])
        assert args.exclude_dirs == ["/a/x", "/a/y"]

    def test_file_pattern_is_repeatable(self):
        args = CLIApplication.parse_args(["-i", "/a", "-f", r".*\.jpg", "--file", r".*\.png"])
        assert args.name_patterns == [r".*\.jpg", r".*\.png"]

    def test_defaults(self):
        args = CLIApplication.parse_args([])
        assert args.include_dirs is None
        assert args.exclude_dirs is None
        assert args.max_depth is None
        assert args.file_size == "1"
        assert args.block_size == "1024"
        assert args.hash_algorithm == "none"
        assert args.follow_symlinks
        assert not args.duplicates_only

    def test_reads_sys_argv_when_no_args_given(self):
        with mock.patch.object(sys, 'argv', ['samebytes', '-i', '/tmp/test', '-d', '3']):
            args = CLIApplication.parse_args()
        assert args.include_dirs == ["/tmp/test"]
        assert args.max_depth == 3

    def test_short_flags(self):
        args = CLIApplication.parse_args(["-i", "/a", "-d", "2", "-s", "10", "-b", "64", "-a", "xxh64", "-P", "-D"])
        assert args.max_depth == 2
        assert args.file_size == "10"
        assert args.block_size == "64"
        assert args.hash_algorithm == "xxh64"
        assert not args.follow_symlinks
        assert args.duplicates_only

    def test_invalid_hash_algorithm_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["-a", "md5"])
        assert exc_info.value.code == 2

    def test_non_integer_depth_rejected(self):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(["-d", "deep"])

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["--help"])
        assert exc_info.value.code == 0
        assert "--include-dir" in capsys.readouterr().out


class TestCreateConfig:
    """Flags are turned into a validated BlockConfiguration."""

    def test_sizes_accept_units(self, tmp_path):
        args = CLIApplication.parse_args(["-i", str(tmp_path), "-s", "4K", "-b", "1MB"])
        config = CLIApplication.create_config(args)

        assert config.min_file_size == 4096
        assert config.block_size == 1024 * 1024
        assert config.include_dirs == (str(tmp_path),)

    def test_hash_alias_resolves(self):
        config = CLIApplication.create_config(CLIApplication.parse_args(["-a", "xxh64"]))
        assert config.hash_algorithm == "xxhash64"

        config = CLIApplication.create_config(CLIApplication.parse_args(["-a", "none"]))
        assert config.hash_algorithm is None

    @pytest.mark.parametrize("argv", [
        ["-b", "0"],
        ["-b", "-5"],
        ["-b", "lots"],
        ["-s", "-1"],
        ["-f", "(unclosed"],
    ])
    def test_invalid_values_raise_configuration_error(self, argv):
        args = CLIApplication.parse_args(argv)
        with pytest.raises(ConfigurationError):
            CLIApplication.create_config(args)


class TestOutput:
    """Groups are printed as blocks of paths separated by blank lines."""

    def test_groups_printed_as_blocks(self, tmp_path, capsys):
        root = tmp_path.resolve() / "root"
        root.mkdir()
        (root / "a").write_bytes(b"hello world")
        (root / "b").write_bytes(b"hello world")
        (root / "c").write_bytes(b"hello xorld")

        main(["-i", str(root), "-b", "5"])

        out = capsys.readouterr().out
        blocks = [set(block.splitlines()) for block in out.strip().split("\n\n")]
        assert {str(root / "a"), str(root / "b")} in blocks
        assert {str(root / "c")} in blocks
        assert len(blocks) == 2

    def test_duplicates_only_hides_singletons(self, tmp_path, capsys):
        tmp_path = tmp_path.resolve()
        (tmp_path / "a").write_bytes(b"same")
        (tmp_path / "b").write_bytes(b"same")
        (tmp_path / "c").write_bytes(b"diff")

        main(["-i", str(tmp_path), "--duplicates-only"])

        out = capsys.readouterr().out
        assert str(tmp_path / "c") not in out
        assert set(out.split()) == {str(tmp_path / "a"), str(tmp_path / "b")}

    def test_min_size_filter_excludes_small_file(self, tmp_path, capsys):
        (tmp_path / "small.bin").write_bytes(b"x" * 50)
        (tmp_path / "big.bin").write_bytes(b"x" * 150)

        main(["-i", str(tmp_path), "--file-size", "100"])

        out = capsys.readouterr().out
        assert "small.bin" not in out
        assert "big.bin" in out

    def test_max_depth_zero_skips_subdirectories(self, tmp_path, capsys):
        sub = tmp_path / "sub"
        sub.mkdir()
        (tmp_path / "top.txt").write_bytes(b"content")
        (sub / "nested.txt").write_bytes(b"content")

        main(["-i", str(tmp_path), "--max-depth", "0"])

        out = capsys.readouterr().out
        assert "top.txt" in out
        assert "nested.txt" not in out

    def test_verbose_prints_statistics_to_stderr(self, tmp_path, capsys):
        (tmp_path / "a").write_bytes(b"same")
        (tmp_path / "b").write_bytes(b"same")

        main(["-i", str(tmp_path), "-v"])

        captured = capsys.readouterr()
        assert "Matching Statistics:" in captured.err
        assert "Matching Statistics:" not in captured.out

    def test_format_groups_empty(self):
        assert CLIApplication.format_groups([]) == ""


class TestExitCodes:
    """0 on success (help included), 2 on configuration errors."""

    def test_success_returns_normally(self, tmp_path):
        (tmp_path / "a").write_bytes(b"data")
        main(["-i", str(tmp_path)])  # No SystemExit

    def test_no_include_dir_is_not_an_error(self, capsys):
        main([])
        assert "nothing to scan" in capsys.readouterr().err

    def test_missing_root_is_not_fatal(self, tmp_path, capsys):
        main(["-i", str(tmp_path / "missing")])
        assert capsys.readouterr().out == ""

    def test_help_exit_status_zero(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])
        assert exc_info.value.code == 0

    def test_invalid_block_size_exits_with_two(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-i", str(tmp_path), "-b", "0"])
        assert exc_info.value.code == 2
        assert "Block size must be positive" in capsys.readouterr().err

    @pytest.mark.parametrize("flag", ["--file-size", "--block-size"])
    def test_malformed_size_exits_with_two_before_scanning(self, tmp_path, capsys, flag):
        with mock.patch("samebytes.cli.FindDuplicatesCommand") as command:
            with pytest.raises(SystemExit) as exc_info:
                main(["-i", str(tmp_path), flag, "lots"])
        assert exc_info.value.code == 2
        assert f"Invalid {flag} format: lots" in capsys.readouterr().err
        command.assert_not_called()

    def test_malformed_pattern_exits_before_scanning(self, tmp_path):
        with mock.patch("samebytes.cli.FindDuplicatesCommand") as command:
            with pytest.raises(SystemExit) as exc_info:
                main(["-i", str(tmp_path), "-f", "[bad"])
        assert exc_info.value.code == 2
        command.assert_not_called()

    def test_quiet_and_verbose_conflict(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "-v"])
        assert exc_info.value.code == 2

    def test_unexpected_error_exits_with_one(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, "run_matching", side_effect=RuntimeError("boom")):
            with pytest.raises(SystemExit) as exc_info:
                main(["-i", str(tmp_path)])
        assert exc_info.value.code == 1

    def test_keyboard_interrupt_exits_with_130(self, tmp_path):
        with mock.patch.object(CLIApplication, "run_matching", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main(["-i", str(tmp_path)])
        assert exc_info.value.code == 130
