"""
Tests for the command-line interface and configuration.
"""

import json
import logging
from pathlib import Path

import pytest

from punchcard import __version__
from punchcard.cli import args_to_config, create_parser, main, parse_args
from punchcard.config import Config, create_default_config, merge_configs
from punchcard.exceptions import ConfigError
from punchcard.logging_config import LogContext, get_logger, setup_logging


class TestConfig:
    """Tests for Config dataclass."""

    def test_create_default_config(self):
        config = create_default_config()
        assert config.encoding == "utf-8"
        assert config.deck_extension == ".deck"
        assert config.accepted_extensions == [".deck", ".bin"]
        assert config.default_deck_name == "Untitled Deck"
        assert config.loaded_deck_name == "Loaded Deck"
        assert config.strip_trailing is True

    def test_to_dict_and_back(self):
        config = Config(encoding="latin-1", overwrite=True)
        restored = Config.from_dict(config.to_dict())
        assert restored == config

    def test_from_dict_ignores_unknown(self):
        config = Config.from_dict({"encoding": "ascii", "colour": "blue"})
        assert config.encoding == "ascii"

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        Config(log_level="DEBUG", accepted_extensions=[".crd"]).save_to_file(path)
        loaded = Config.load_from_file(path)
        assert loaded.log_level == "DEBUG"
        assert loaded.accepted_extensions == [".crd"]

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            Config.load_from_file(path)

    def test_load_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            Config.load_from_file(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            Config.load_from_file(tmp_path / "none.json")

    def test_validate_defaults(self):
        assert create_default_config().is_valid()

    def test_validate_errors(self):
        config = Config(
            encoding="no-such-codec",
            deck_extension="deck",
            log_level="LOUD",
            verbose=True,
            quiet=True,
        )
        errors = config.validate()
        assert len(errors) == 4
        assert not config.is_valid()

    def test_merge_configs(self):
        base = Config(encoding="latin-1", overwrite=True)
        override = Config(log_level="DEBUG")
        merged = merge_configs(base, override)
        assert merged.encoding == "latin-1"
        assert merged.overwrite is True
        assert merged.log_level == "DEBUG"


class TestParser:
    """Tests for argument parsing."""

    def test_encode_args(self):
        args = parse_args(["encode", "in.txt", "-o", "out.deck", "--name", "X"])
        assert args.command == "encode"
        assert args.input == Path("in.txt")
        assert args.output == Path("out.deck")
        assert args.name == "X"

    def test_global_options(self):
        args = parse_args(["-v", "--encoding", "latin-1", "list", "a.deck"])
        assert args.verbose
        assert args.encoding == "latin-1"
        assert args.command == "list"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_args_to_config(self):
        config = args_to_config(parse_args(["decode", "a.deck", "--keep-trailing", "--overwrite"]))
        assert config.strip_trailing is False
        assert config.overwrite is True

    def test_args_to_config_with_file(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"encoding": "latin-1", "strip_trailing": False}))
        config = args_to_config(parse_args(["-c", str(path), "validate", "."]))
        assert config.encoding == "latin-1"
        assert config.strip_trailing is False


class TestMain:
    """End-to-end tests through main()."""

    def test_encode(self, sample_text_file, capsys):
        assert main(["encode", str(sample_text_file)]) == 0
        assert sample_text_file.with_suffix(".deck").stat().st_size == 540
        assert "Punched 5 cards" in capsys.readouterr().out

    def test_encode_quiet(self, sample_text_file, capsys):
        assert main(["-q", "encode", str(sample_text_file)]) == 0
        assert capsys.readouterr().out == ""

    def test_encode_existing_output_fails(self, sample_text_file, capsys):
        sample_text_file.with_suffix(".deck").write_bytes(b"")
        assert main(["encode", str(sample_text_file)]) == 1
        assert "already exists" in capsys.readouterr().err

    def test_decode_to_stdout(self, sample_deck_file, sample_lines, capsys):
        assert main(["decode", str(sample_deck_file)]) == 0
        assert capsys.readouterr().out.splitlines() == sample_lines

    def test_decode_to_file(self, sample_deck_file, tmp_path, sample_lines):
        out = tmp_path / "out.txt"
        assert main(["decode", str(sample_deck_file), "-o", str(out)]) == 0
        assert out.read_text().splitlines() == sample_lines

    def test_decode_bad_file(self, deck_dir, capsys):
        path = deck_dir / "bad.deck"
        path.write_bytes(bytes(100))
        assert main(["decode", str(path)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_list(self, sample_deck_file, capsys):
        assert main(["list", str(sample_deck_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("HELLO (5 cards)")
        assert "0005 |           STOP RUN." in out

    def test_list_missing_file(self, deck_dir, capsys):
        assert main(["list", str(deck_dir / "none.deck")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_validate_directory(self, sample_deck_file, capsys):
        assert main(["validate", str(sample_deck_file.parent)]) == 0
        assert "Validated 1 files, 5 cards" in capsys.readouterr().out

    def test_validate_bad_file(self, deck_dir, capsys):
        path = deck_dir / "bad.deck"
        path.write_bytes(bytes(7))
        assert main(["validate", str(path)]) == 1
        assert "Errors (1)" in capsys.readouterr().out

    def test_invalid_config(self, sample_deck_file, capsys):
        assert main(["--log-level", "LOUD", "list", str(sample_deck_file)]) == 1
        assert "Invalid log level" in capsys.readouterr().err

    def test_unreadable_config_file(self, sample_deck_file, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{")
        assert main(["-c", str(path), "list", str(sample_deck_file)]) == 1
        assert "Configuration error" in capsys.readouterr().err


class TestLogging:
    """Tests for logging setup."""

    def test_get_logger_names(self):
        assert get_logger().name == "punchcard"
        assert get_logger("card").name == "punchcard.card"

    def test_setup_logging_level(self):
        logger = setup_logging(level="debug")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_setup_logging_file(self, tmp_path):
        log_file = tmp_path / "punchcard.log"
        logger = setup_logging(level="INFO", log_file=log_file)
        get_logger("test").info("hello log")
        for handler in logger.handlers:
            handler.flush()
        assert "hello log" in log_file.read_text()

    def test_log_context_restores_level(self):
        logger = get_logger("context")
        logger.setLevel(logging.WARNING)
        with LogContext(logger, logging.DEBUG):
            assert logger.level == logging.DEBUG
        assert logger.level == logging.WARNING
