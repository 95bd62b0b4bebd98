import json
from datetime import timedelta

import pytest

from codeagent.config import (
    AVAILABLE_MODELS,
    CHAT_COMPLETIONS_ENDPOINT,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    Config,
    ConfigPaths,
    Session,
    SessionInvalidated,
    build_paths,
    default_config,
    get_provider,
    init_config,
    init_session,
    invalidate_session,
    load_config,
    save_config,
)


@pytest.fixture
def paths(tmp_path):
    return build_paths(tmp_path)


def test_build_paths_creates_directory(tmp_path):
    result = build_paths(tmp_path)
    assert result.config_dir == str(tmp_path / CONFIG_DIR_NAME)
    assert result.config_file == str(tmp_path / CONFIG_DIR_NAME / CONFIG_FILE_NAME)
    assert (tmp_path / CONFIG_DIR_NAME).is_dir()


def test_build_paths_uses_home_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert build_paths().config_dir == str(tmp_path / CONFIG_DIR_NAME)


def test_default_config_values(paths):
    cfg = default_config(paths)
    assert cfg.version == "1.0.0"
    assert cfg.api_timeout == timedelta(minutes=5)
    assert cfg.max_context_size == 4000
    assert cfg.max_request_retries == 3
    assert cfg.temperature == 0.7
    assert cfg.enable_history is True
    assert cfg.api_key == ""
    assert cfg.config_paths == paths


def test_save_and_load_round_trip(paths):
    cfg = default_config(paths)
    cfg.name = "Ada"
    cfg.api_key = "placeholder"
    cfg.session = init_session("Ada", "o3")
    cfg.session.work_dir = "/tmp/project"
    save_config(cfg)
    assert load_config(paths) == cfg


def test_saved_json_layout(paths):
    save_config(default_config(paths))
    with open(paths.config_file, encoding="utf-8") as handle:
        data = json.load(handle)
    assert data["api_timeout"] == 300_000_000_000
    assert data["config_paths"]["ConfigFile"] == paths.config_file
    assert set(data["session"]) == {"model", "work_dir", "provider", "api"}


def test_load_replaces_stored_paths(paths, tmp_path):
    cfg = default_config(ConfigPaths(config_dir="elsewhere", config_file=paths.config_file))
    save_config(cfg)
    assert load_config(paths).config_paths == paths


def test_load_missing_file_raises(paths):
    with pytest.raises(FileNotFoundError):
        load_config(paths)


def test_load_invalid_json_raises(paths):
    with open(paths.config_file, "w", encoding="utf-8") as handle:
        handle.write("{not json")
    with pytest.raises(ValueError):
        load_config(paths)


def test_from_dict_missing_fields_are_zero(paths):
    cfg = Config.from_dict({}, paths)
    assert cfg == Config(config_paths=paths)


def test_from_dict_rejects_wrong_type(paths):
    with pytest.raises(ValueError):
        Config.from_dict({"name": 5}, paths)


def test_session_dict_round_trip():
    session = init_session("Ada", "claude-2")
    assert Session.from_dict(session.to_dict()) == session


def test_init_config_creates_then_loads(tmp_path):
    first = init_config(tmp_path)
    assert first.version == "1.0.0"
    first.name = "Grace"
    first.update_config()
    assert init_config(tmp_path).name == "Grace"


def test_init_config_replaces_corrupt_file(tmp_path):
    paths = build_paths(tmp_path)
    with open(paths.config_file, "w", encoding="utf-8") as handle:
        handle.write("[]")
    assert init_config(tmp_path) == default_config(paths)


def test_init_session_requires_name_and_model():
    assert init_session("", "o3") == Session()
    assert init_session("Ada", "") == Session()


def test_init_session_sets_provider_and_endpoint():
    session = init_session("Ada", "o4-mini")
    assert session.model == "o4-mini"
    assert session.provider == "openai"
    assert session.api == CHAT_COMPLETIONS_ENDPOINT


@pytest.mark.parametrize("model", AVAILABLE_MODELS)
def test_get_provider_known_models(model):
    expected = "anthropic" if model == "claude-2" else "openai"
    assert get_provider(model) == expected


def test_get_provider_unknown_defaults(capsys):
    assert get_provider("mystery") == "openai"
    assert "Model not found. Defaulting to OpenAI" in capsys.readouterr().out


def test_invalidate_session_removes_file(paths):
    cfg = default_config(paths)
    save_config(cfg)
    with pytest.raises(SessionInvalidated):
        invalidate_session(cfg)
    with pytest.raises(FileNotFoundError):
        load_config(paths)


def test_invalidate_session_without_file(paths):
    with pytest.raises(FileNotFoundError):
        invalidate_session(default_config(paths))