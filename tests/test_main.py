from unittest.mock import patch

import pytest

from wordcascade.environment import BenchmarkResult
from wordcascade.main import load_config, main


class TestLoadConfig:
    """Test YAML config loading."""

    def test_full_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "max_turns: 12\n"
            "session:\n"
            "  seed: 3\n"
            "  strict: true\n"
            "player:\n"
            "  model: claude-3-5-sonnet\n"
            "  top_p: 0.8\n"
        )
        config = load_config(str(path))
        assert config.max_turns == 12
        assert config.session.seed == 3
        assert config.session.strict is True
        assert config.player.model == "claude-3-5-sonnet"
        assert config.player.__pydantic_extra__ == {"top_p": 0.8}

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        config = load_config(str(path))
        assert config.max_turns == 60
        assert config.session.initial_timer_seconds == 120

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))


class TestMain:
    """Test the command-line entry point."""

    def test_bad_config_returns_error(self, tmp_path):
        assert main([str(tmp_path / "nope.yaml")]) == 1

    def test_run_and_save(self, tmp_path):
        """A run is saved to the requested output path."""
        config = tmp_path / "config.yaml"
        config.write_text("max_turns: 1\n")
        output = tmp_path / "match.json"

        with patch("wordcascade.main.WordBench.run") as mock_run:
            mock_run.return_value = BenchmarkResult(config=load_config(str(config)))
            assert main([str(config), "--output", str(output)]) == 0

        assert output.exists()
