"""
Tests for builder configuration.
"""

import pytest
from codebuilder import CodeBuilder
from codebuilder.config import (
    DEFAULT_INDENTATION,
    BuilderConfig,
    config_from_dict,
    config_from_yaml,
    config_to_dict,
    load_config,
)
from codebuilder.errors import ConfigError


class TestBuilderConfig:
    """Test BuilderConfig validation."""

    def test_defaults(self):
        """Defaults should be a tab unit at depth zero."""
        config = BuilderConfig()
        assert config.indentation == DEFAULT_INDENTATION == "\t"
        assert config.initial_indent == 0

    def test_negative_initial_indent(self):
        """A negative initial_indent should be rejected."""
        with pytest.raises(ConfigError):
            BuilderConfig(initial_indent=-2)

    def test_non_string_indentation(self):
        """indentation must be a string."""
        with pytest.raises(ConfigError):
            BuilderConfig(indentation=4)

    def test_config_is_per_builder(self):
        """Two builders should keep their own unit strings."""
        tabs = CodeBuilder(1)
        spaces = CodeBuilder(1, config=BuilderConfig(indentation="  "))
        tabs.append("x")
        spaces.append("x")
        assert tabs.finalize() == "\tx"
        assert spaces.finalize() == "  x"


class TestConfigLoading:
    """Test dict/YAML loading."""

    def test_from_dict(self):
        config = config_from_dict({"indentation": "    ", "initial_indent": 2})
        assert config == BuilderConfig(indentation="    ", initial_indent=2)
        assert config_to_dict(config) == {"indentation": "    ", "initial_indent": 2}

    def test_empty_dict_gives_defaults(self):
        assert config_from_dict(None) == BuilderConfig()
        assert config_from_dict({}) == BuilderConfig()

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown"):
            config_from_dict({"indent": "  "})

    def test_from_yaml(self):
        config = config_from_yaml('indentation: "  "\ninitial_indent: 1\n')
        assert config.indentation == "  "
        assert config.initial_indent == 1

    def test_invalid_yaml(self):
        with pytest.raises(ConfigError):
            config_from_yaml("indentation: [unclosed")

    def test_non_mapping_yaml(self):
        with pytest.raises(ConfigError):
            config_from_yaml("- a\n- b\n")

    def test_load_config_file(self, tmp_path):
        path = tmp_path / "builder.yaml"
        path.write_text('indentation: "    "\n')
        config = load_config(str(path))
        assert config.indentation == "    "
        assert config.initial_indent == 0
