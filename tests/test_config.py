"""Tests for configuration module."""

import pytest

from diffnum.config import AnnotateConfig
from diffnum.errors import ConfigError


class TestAnnotateConfig:
    """Test AnnotateConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = AnnotateConfig.from_tokens([])

        assert config.show_header is True
        assert config.show_hunk is True
        assert config.show_path is False
        assert config.show_binary is False
        assert config.allow_colons_in_path is True
        assert config.color_line_number == ""
        assert config.color_path == ""
        assert config.color_separator == ""

    def test_constructor_defaults_match_resolved_defaults(self):
        """The dataclass defaults are the resolved defaults."""
        assert AnnotateConfig() == AnnotateConfig.from_tokens([])

    def test_hidden_headers_flip_dependent_defaults(self):
        """Without headers, paths and binary lines are shown and colons rejected."""
        config = AnnotateConfig.from_tokens(["show_header=0"])

        assert config.show_header is False
        assert config.show_hunk is False
        assert config.show_path is True
        assert config.show_binary is True
        assert config.allow_colons_in_path is False

    def test_show_path_makes_colons_forbidden(self):
        """Displaying paths makes colon rejection the default."""
        config = AnnotateConfig.from_tokens(["show_path=1"])

        assert config.show_path is True
        assert config.allow_colons_in_path is False
        assert config.show_binary is False

    def test_explicit_values_override_derived_defaults(self):
        """Explicit tokens always win over derived defaults."""
        config = AnnotateConfig.from_tokens(
            ["show_header=0", "show_hunk=1", "show_path=0", "allow_colons_in_path=0"]
        )

        assert config.show_hunk is True
        assert config.show_path is False
        assert config.show_binary is False
        assert config.allow_colons_in_path is False

    def test_later_tokens_win(self):
        """A repeated option takes its last value."""
        config = AnnotateConfig.from_tokens(["show_path=1", "show_path=0"])
        assert config.show_path is False

    @pytest.mark.parametrize("value", ["1", "true", "YES", "On"])
    def test_true_spellings(self, value):
        """Accepted spellings of true."""
        assert AnnotateConfig.from_tokens([f"show_path={value}"]).show_path is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "OFF"])
    def test_false_spellings(self, value):
        """Accepted spellings of false."""
        assert AnnotateConfig.from_tokens([f"show_header={value}"]).show_header is False

    def test_colors(self):
        """Color options are stored verbatim."""
        config = AnnotateConfig.from_tokens(
            ["color_line_number=1;33", "color_path=35", "color_separator=2"]
        )

        assert config.color_line_number == "1;33"
        assert config.color_path == "35"
        assert config.color_separator == "2"

    def test_to_options_dict(self):
        """Test conversion to an options dictionary."""
        options = AnnotateConfig.from_tokens(["show_path=1"]).to_options_dict()
        assert options["show_path"] is True
        assert set(options) == {
            "show_header",
            "show_hunk",
            "show_path",
            "show_binary",
            "allow_colons_in_path",
            "color_line_number",
            "color_path",
            "color_separator",
        }


class TestConfigValidation:
    """Test rejection of malformed options."""

    def test_non_boolean_value(self):
        """Test validation of boolean options."""
        with pytest.raises(ConfigError, match="show_path") as exc_info:
            AnnotateConfig.from_tokens(["show_path=maybe"])
        assert exc_info.value.code == "CONFIG_INVALID"
        assert exc_info.value.details["value"] == "maybe"

    def test_malformed_color(self):
        """Test validation of color codes."""
        with pytest.raises(ConfigError, match="color_path"):
            AnnotateConfig.from_tokens(["color_path=red"])

    def test_malformed_color_in_constructor(self):
        """Direct construction validates colors as well."""
        with pytest.raises(ConfigError):
            AnnotateConfig(color_separator="1;x")

    def test_unknown_option(self):
        """Unknown keys are rejected."""
        with pytest.raises(ConfigError, match="unknown option"):
            AnnotateConfig.from_tokens(["show_everything=1"])

    def test_token_without_equals(self):
        """Tokens must be key=value."""
        with pytest.raises(ConfigError, match="expected key=value"):
            AnnotateConfig.from_tokens(["show_path"])

    def test_config_is_immutable(self):
        """The resolved configuration is read-only."""
        config = AnnotateConfig()
        with pytest.raises(AttributeError):
            config.show_path = True
