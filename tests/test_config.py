import json

import pytest

from tessera import (
    ConfigurationError,
    Container,
    ContainerConfig,
    EnvSource,
    FileSource,
    MappingSource,
    configuration,
)


def test_defaults():
    cfg = configuration()
    assert cfg == ContainerConfig()
    assert cfg.default_to_shared is False
    assert cfg.default_to_overwrite is False
    assert cfg.max_provider_depth == 8


def test_env_source_parses_typed_values():
    env = EnvSource(environ={"TESSERA_DEFAULT_TO_SHARED": "yes", "TESSERA_MAX_PROVIDER_DEPTH": "3", "OTHER": "1"})
    assert env.load() == {"default_to_shared": True, "max_provider_depth": 3}


def test_env_source_reads_os_environ(monkeypatch):
    monkeypatch.setenv("APP_DEFAULT_TO_OVERWRITE", "on")
    assert configuration(EnvSource(prefix="APP_")).default_to_overwrite is True


def test_env_source_rejects_bad_values():
    env = EnvSource(environ={"TESSERA_DEFAULT_TO_SHARED": "maybe"})
    with pytest.raises(ConfigurationError, match=r"Invalid bool for default_to_shared in EnvSource\(prefix='TESSERA_'\)"):
        env.load()


def test_mapping_source_uses_tessera_section():
    assert MappingSource({"tessera": {"default_to_overwrite": True}}).load() == {"default_to_overwrite": True}
    assert MappingSource({"default_to_overwrite": "0"}).load() == {"default_to_overwrite": False}


def test_mapping_source_rejects_bool_as_depth():
    with pytest.raises(ConfigurationError, match="Invalid int for max_provider_depth"):
        MappingSource({"max_provider_depth": True}).load()


def test_precedence_overrides_then_sources_in_order():
    first = EnvSource(environ={"TESSERA_DEFAULT_TO_SHARED": "false"})
    second = MappingSource({"tessera": {"default_to_shared": True, "max_provider_depth": 3}})
    cfg = configuration(first, second, overrides={"max_provider_depth": "5"})
    assert cfg.default_to_shared is False
    assert cfg.max_provider_depth == 5


def test_invalid_override_raises():
    with pytest.raises(ConfigurationError, match="Invalid bool"):
        configuration(overrides={"default_to_shared": "maybe"})


def test_depth_must_be_positive():
    with pytest.raises(ConfigurationError):
        ContainerConfig(max_provider_depth=0)


def test_unknown_source_type():
    with pytest.raises(ConfigurationError, match="Unknown configuration source"):
        configuration(object())


def test_json_file_source(tmp_path):
    path = tmp_path / "tessera.json"
    path.write_text(json.dumps({"tessera": {"default_to_shared": True}}), encoding="utf-8")
    assert configuration(FileSource(str(path))).default_to_shared is True


def test_file_source_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Failed to load config file"):
        FileSource(str(tmp_path / "missing.json"))


def test_file_source_requires_a_mapping(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        FileSource(str(path))


def test_yaml_file_source(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "tessera.yaml"
    path.write_text("tessera:\n  default_to_overwrite: true\n  max_provider_depth: 2\n", encoding="utf-8")
    cfg = configuration(FileSource(str(path)))
    assert cfg.default_to_overwrite is True
    assert cfg.max_provider_depth == 2


def test_container_setters_replace_config():
    c = Container(config=configuration(overrides={"max_provider_depth": 2}))
    original = c.config
    c.default_to_shared().default_to_overwrite()
    assert original.default_to_shared is False
    assert c.config == ContainerConfig(default_to_shared=True, default_to_overwrite=True, max_provider_depth=2)
