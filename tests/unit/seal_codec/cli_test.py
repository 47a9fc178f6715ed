import json
import logging

import pytest

from seal_codec.cli import EXIT_CODEC_ERROR, main
from seal_codec.seal import DigitalSealV3


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_cli_check_digit(capsys):
    """Test the check-digit command."""
    assert main(["check-digit", "362142069"]) == 0
    assert capsys.readouterr().out.strip() == "9"


def test_cli_c40(capsys):
    """Test the C40 encode and decode commands."""
    assert main(["c40-encode", "XK CD"]) == 0
    assert capsys.readouterr().out.strip() == "EB0466A9"

    assert main(["c40-decode", "EB 04 66 A9"]) == 0
    assert capsys.readouterr().out.strip() == "XK<CD"


def test_cli_decode_seal(capsys):
    """Test decoding a seal to JSON."""
    seal = DigitalSealV3(features={0x01: b"\x0a"})
    assert main(["--log-level", "OFF", "decode-seal", seal.signed_seal.hex()]) == 0
    decoded = json.loads(capsys.readouterr().out)
    assert decoded["version"] == 2
    assert decoded["features"] == {"0x01": "0A"}

    assert main(["--log-level", "OFF", "decode-seal", "--unsigned", seal.unsigned_seal.hex()]) == 0


def test_cli_codec_error_exit_code():
    """Test that codec errors exit with a non-zero status."""
    assert main(["--log-level", "OFF", "decode-seal", "DD02"]) == EXIT_CODEC_ERROR
    assert main(["--log-level", "OFF", "check-digit", "12-3"]) == EXIT_CODEC_ERROR


def test_cli_rejects_bad_hex():
    """Test argument validation."""
    with pytest.raises(SystemExit):
        main(["c40-decode", "XYZ"])
