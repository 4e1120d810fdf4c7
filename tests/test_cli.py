from __future__ import annotations

import logging

import pytest
from PIL import Image

from imagepipe import cli, config
from imagepipe.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main

from conftest import save_temp_image


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(config.LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_cli_applies_script(tmp_path):
    source = save_temp_image(tmp_path, size=(217, 447))
    output = tmp_path / "out.png"
    code = main([
        str(source),
        str(output),
        "--apply-operations",
        "set resize sampling_filter catmullrom; resize 80 100; blur 5; fliph; flipv; rotate90",
    ])
    assert code == EXIT_OK
    with Image.open(output) as written:
        assert written.size == (100, 80)


def test_cli_reads_script_file(tmp_path):
    source = save_temp_image(tmp_path, size=(20, 10))
    script = tmp_path / "program.txt"
    script.write_text("# rotate only\nrotate270\n", encoding="utf-8")
    output = tmp_path / "out.png"
    assert main([str(source), str(output), "--script-file", str(script)]) == EXIT_OK
    with Image.open(output) as written:
        assert written.size == (10, 20)


def test_cli_script_error_is_usage_error(tmp_path, capsys):
    source = save_temp_image(tmp_path)
    output = tmp_path / "out.png"
    assert main([str(source), str(output), "-x", "resize ten 10"]) == EXIT_USAGE
    assert "expected an integer" in capsys.readouterr().err
    assert not output.exists()


def test_cli_missing_script_file(tmp_path):
    source = save_temp_image(tmp_path)
    code = main([str(source), str(tmp_path / "out.png"), "--script-file", str(tmp_path / "nope.txt")])
    assert code == EXIT_USAGE


def test_cli_script_file_not_utf8(tmp_path, capsys):
    source = save_temp_image(tmp_path)
    script = tmp_path / "program.txt"
    script.write_bytes(b"rotate90\n\xff\xfe\n")
    output = tmp_path / "out.png"
    assert main([str(source), str(output), "--script-file", str(script)]) == EXIT_USAGE
    assert "cannot read script" in capsys.readouterr().err
    assert not output.exists()


def test_cli_engine_error_writes_nothing(tmp_path, capsys):
    source = save_temp_image(tmp_path, size=(4, 4))
    output = tmp_path / "out.png"
    assert main([str(source), str(output), "-x", "invert; crop 0 0 9 9"]) == EXIT_FAILURE
    assert "out of bounds" in capsys.readouterr().err
    assert not output.exists()


def test_cli_writes_log_file(tmp_path):
    source = save_temp_image(tmp_path)
    log_file = tmp_path / "logs" / "imagepipe.log"
    code = main([
        str(source),
        str(tmp_path / "out.png"),
        "-x",
        "resize 3 3",
        "--log-level",
        "DEBUG",
        "--log-file",
        str(log_file),
    ])
    assert code == EXIT_OK
    for handler in logging.getLogger(config.LOGGER_NAME).handlers:
        handler.flush()
    assert "resize filter: gaussian" in log_file.read_text(encoding="utf-8")


def test_cli_module_is_documented():
    assert cli.__doc__ and cli.__doc__.strip()
