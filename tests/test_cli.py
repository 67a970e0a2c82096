"""Tests for the command-line interface."""

from unittest.mock import Mock, patch

import pytest

from minimal_otp.cli import build_parser, main, watch_command
from minimal_otp.hashing import HashAlgorithmKind


SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_hotp_command(capsys):
    """Test printing an HOTP code."""
    assert main(["hotp", SECRET, "1"]) == 0
    assert capsys.readouterr().out.strip() == "287082"


def test_hotp_command_digits(capsys):
    """Test the --digits option."""
    assert main(["hotp", SECRET, "0", "--digits", "8"]) == 0
    assert capsys.readouterr().out.strip() == "00755224"


def test_totp_command(capsys):
    """Test printing a TOTP code for a fixed time."""
    assert main(["totp", SECRET, "--time", "59"]) == 0
    assert capsys.readouterr().out.strip() == "287082"


def test_totp_command_algorithm(capsys):
    """Test that --algorithm selects the hash."""
    secret_sha256 = "GEZDGNBVGY3TQOJQ" * 3 + "GEZA"
    assert main(["totp", secret_sha256, "-t", "59", "-a", "SHA-256", "-d", "8"]) == 0
    assert capsys.readouterr().out.strip() == "00119246"


def test_verify_hotp_command(capsys):
    """Test checking HOTP codes."""
    assert main(["verify-hotp", SECRET, "755224", "0"]) == 0
    assert "✓ valid" in capsys.readouterr().out

    assert main(["verify-hotp", SECRET, "755225", "0"]) == 1
    assert "✗ invalid" in capsys.readouterr().out


def test_verify_totp_command(capsys):
    """Test checking TOTP codes."""
    assert main(["verify-totp", SECRET, "287082", "--time", "30"]) == 0
    assert main(["verify-totp", SECRET, "287082", "--time", "60"]) == 1


def test_invalid_secret(capsys):
    """Test that decode errors are reported on stderr."""
    assert main(["hotp", "12345678", "0"]) == 1
    assert "✗ Invalid Base32" in capsys.readouterr().err


def test_invalid_period(capsys):
    """Test that a zero time step is reported on stderr."""
    assert main(["totp", SECRET, "--period", "0"]) == 1
    assert "positive" in capsys.readouterr().err


def test_unsupported_algorithm_rejected():
    """Test that unknown algorithms are rejected by the parser."""
    with pytest.raises(SystemExit):
        main(["hotp", SECRET, "0", "--algorithm", "md5"])


def test_no_command(capsys):
    """Test that running without a command prints help."""
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_parser_defaults():
    """Test default option values."""
    args = build_parser().parse_args(["totp", SECRET])
    assert args.period == 30
    assert args.time == 0
    assert args.digits == 6
    assert args.algorithm is HashAlgorithmKind.SHA1


@patch("minimal_otp.cli.time.time", return_value=59.0)
def test_watch_command(mock_time, capsys):
    """Test that watch prints one line per interval for every algorithm."""
    args = build_parser().parse_args(["watch", "--count", "2", "--interval", "5"])
    sleep = Mock()

    assert watch_command(args, sleep=sleep) == 0

    lines = [
        line for line in capsys.readouterr().out.splitlines() if line.startswith("TOTP:")
    ]
    assert len(lines) == 2
    assert lines[0].endswith(" at 59")
    assert lines[0].count(" - ") == 2
    sleep.assert_called_once_with(5.0)


def test_watch_command_interrupted(capsys):
    """Test that Ctrl-C stops the loop cleanly."""
    args = build_parser().parse_args(["watch", SECRET])
    sleep = Mock(side_effect=KeyboardInterrupt)

    assert watch_command(args, sleep=sleep) == 0
    out = capsys.readouterr().out
    assert out.count("TOTP:") == 1
    sleep.assert_called_once_with(1.0)
