import json

from core.config import Config, load_config


def test_creates_default_config(tmp_path):
    config_file = tmp_path / "nested" / "config.json"

    config = load_config(config_file)

    assert config == Config()
    assert json.loads(config_file.read_text())["proxy"]["port"] == 8787


def test_loads_existing_config(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"proxy": {"port": 9000}, "upstream": {"timeout": 12.5}}))

    config = load_config(config_file)

    assert config.proxy.port == 9000
    assert config.upstream.timeout == 12.5
    assert config.tempo.cloud_host == "api.eu.tempo.io"


def test_corrupt_config_is_backed_up(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{broken")

    config = load_config(config_file)

    assert config == Config()
    assert (tmp_path / "config.json.bak").read_text() == "{broken"
