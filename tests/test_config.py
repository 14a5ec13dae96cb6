"""Tests for configuration loading."""

import logging

from asanhai.config import Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()
        assert config.default_filter == "all"
        assert config.date_format == "%d/%m/%Y"

    def test_parses_values(self, tmp_path):
        path = tmp_path / "asanhai.conf"
        path.write_text(
            "# asanhai settings\n"
            "\n"
            "DATA_DIR = ~/tasks  # where the json lives\n"
            'DEFAULT_FILTER = "Pending"\n'
            "date_format = '%Y-%m-%d' # ISO\n"
            "TIMESTAMP_FORMAT = \"%Y-%m-%d %H:%M # literal hash\"\n"
            "not a setting\n"
            "UNKNOWN_KEY = whatever\n"
        )
        config = load_config(path)

        assert config.data_dir == "~/tasks"
        assert config.default_filter == "pending"
        assert config.date_format == "%Y-%m-%d"
        assert config.timestamp_format == "%Y-%m-%d %H:%M # literal hash"

    def test_unknown_filter_ignored(self, tmp_path, caplog):
        path = tmp_path / "asanhai.conf"
        path.write_text("DEFAULT_FILTER = someday\n")

        with caplog.at_level(logging.WARNING, logger="asanhai.config"):
            config = load_config(path)

        assert config.default_filter == "all"
        assert "someday" in caplog.text

    def test_unterminated_quote(self, tmp_path):
        path = tmp_path / "asanhai.conf"
        path.write_text('DATA_DIR = "/srv/tasks\n')
        assert load_config(path).data_dir == "/srv/tasks"
