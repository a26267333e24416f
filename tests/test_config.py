from pathlib import Path

from app import config


def test_defaults_when_environment_is_empty():
    env = {}
    assert config.get_tasks_path(env) == Path("data/tasks.json")
    assert config.get_chat_completion_url(env) is None
    assert config.get_chat_api_key(env) is None
    assert config.get_chat_timeout(env) == 30.0
    assert config.get_conversation_max_turns(env) == 20
    assert config.is_logging_enabled(env) is True
    assert config.get_turn_log_path(env) == Path("logs/turns.jsonl")
    assert config.get_log_level(env) == "INFO"
    assert config.get_web_ui_port(env) == 9000


def test_overrides_are_read_from_environment():
    env = {
        "TASKS_PATH": "/tmp/board.json",
        "CHAT_COMPLETION_URL": " https://example.test/functions/v1/chat ",
        "CHAT_API_KEY": "anon-key",
        "CHAT_TIMEOUT_SECONDS": "12.5",
        "CONVERSATION_MAX_TURNS": "6",
        "LOGGING_ENABLED": "off",
        "LOG_DIR": "/var/log/board",
        "LOG_MAX_BYTES": "2048",
        "LOG_BACKUP_COUNT": "1",
        "LOG_LEVEL": "debug",
        "WEB_UI_HOST": "0.0.0.0",
        "WEB_UI_PORT": "8080",
    }
    assert config.get_tasks_path(env) == Path("/tmp/board.json")
    assert config.get_chat_completion_url(env) == "https://example.test/functions/v1/chat"
    assert config.get_chat_api_key(env) == "anon-key"
    assert config.get_chat_timeout(env) == 12.5
    assert config.get_conversation_max_turns(env) == 6
    assert config.is_logging_enabled(env) is False
    assert config.get_turn_log_path(env) == Path("/var/log/board/turns.jsonl")
    assert config.get_log_max_bytes(env) == 2048
    assert config.get_log_backup_count(env) == 1
    assert config.get_log_level(env) == "DEBUG"
    assert config.get_web_ui_host(env) == "0.0.0.0"
    assert config.get_web_ui_port(env) == 8080


def test_invalid_values_fall_back_to_defaults():
    env = {
        "CHAT_TIMEOUT_SECONDS": "soon",
        "CONVERSATION_MAX_TURNS": "-3",
        "LOGGING_ENABLED": "maybe",
        "LOG_MAX_BYTES": "lots",
        "LOG_BACKUP_COUNT": "-1",
        "LOG_LEVEL": "chatty",
        "WEB_UI_PORT": "70000",
    }
    assert config.get_chat_timeout(env) == 30.0
    assert config.get_conversation_max_turns(env) == 20
    assert config.is_logging_enabled(env) is True
    assert config.get_log_max_bytes(env) == 1_000_000
    assert config.get_log_backup_count(env) == 5
    assert config.get_log_level(env) == "INFO"
    assert config.get_web_ui_port(env) == 9000
