# ============================================================================
# LogTree - Configuration Tests
#
# Purpose: Test YAML loading, env overrides and registry wiring of Config
# Dependencies: pytest, pyyaml, LogTree
# Usage: pytest tests/test_config.py -v
# ============================================================================

from pathlib import Path

import pytest
import yaml

from LogTree.config import Config, RecordConfig, RegistryConfig, load_config
from LogTree.errors import ConfigurationError
from LogTree.levels import Level
from LogTree.registry import ModuleRegistry
from LogTree.sinks.stream import StreamKind

DEFAULT_YAML = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


class TestDefaults:
    def test_model_defaults(self):
        config = Config()
        assert config.record.module_width == 8
        assert config.record.max_message_length == 255
        assert config.registry.max_module_subfields == 32
        assert config.registry.root_level_value == Level.WARNING
        assert config.registry.root_stream_value == StreamKind.DEVNULL

    def test_default_yaml_matches_model(self):
        assert DEFAULT_YAML.exists()
        assert Config.from_default() == Config()

    def test_load_config_without_path(self):
        assert load_config() == Config.from_default()


class TestFromYaml:
    def test_partial_file_merges_over_defaults(self, tmp_path):
        path = tmp_path / "logtree.yaml"
        path.write_text(yaml.safe_dump({"registry": {"root_level": "debug", "root_stream": "stderr"}}))
        config = Config.from_yaml(str(path))
        assert config.registry.root_level == "DEBUG"
        assert config.registry.root_stream_value == StreamKind.STDERR
        assert config.registry.max_module_subfields == 32
        assert config.record.max_record_length == 255

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Config.from_yaml(str(path)) == Config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(str(tmp_path / "absent.yaml"))

    def test_invalid_level(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"registry": {"root_level": "loud"}}))
        with pytest.raises(ConfigurationError):
            Config.from_yaml(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            Config.from_yaml(str(path))


class TestEnvOverrides:
    def test_registry_override(self, monkeypatch):
        monkeypatch.setenv("LOGTREE_REGISTRY_ROOT_LEVEL", "error")
        monkeypatch.setenv("LOGTREE_REGISTRY_MAX_MODULE_SUBFIELDS", "4")
        config = Config.from_default()
        assert config.registry.root_level_value == Level.ERROR
        assert config.registry.max_module_subfields == 4

    def test_record_override(self, monkeypatch):
        monkeypatch.setenv("LOGTREE_RECORD_MODULE_WIDTH", "12")
        assert Config.from_default().record.module_width == 12

    def test_unknown_keys_ignored(self, monkeypatch):
        monkeypatch.setenv("LOGTREE_REGISTRY_COLOUR", "blue")
        assert Config.from_default() == Config()

    def test_parse_env_value(self):
        assert Config._parse_env_value("true") is True
        assert Config._parse_env_value("no") is False
        assert Config._parse_env_value("7") == 7
        assert Config._parse_env_value("0.5") == 0.5
        assert Config._parse_env_value("stderr") == "stderr"


class TestRegistryUsesConfig:
    def test_root_from_config(self):
        config = Config(registry=RegistryConfig(root_level="ERROR", root_stream="STDOUT"))
        reg = ModuleRegistry(config)
        root = reg.get_root_logger()
        assert root.get_level() == Level.ERROR
        assert root.get_stream() == StreamKind.STDOUT
        root.release()

    def test_record_width_from_config(self, capsys):
        config = Config(record=RecordConfig(module_width=3), registry=RegistryConfig(root_stream="STDOUT"))
        reg = ModuleRegistry(config)
        log = reg.get_logger("NETWORK")
        log.error("down")
        assert " NET: [error] down" in capsys.readouterr().out
        log.release()
