import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from mifirm.config import DEFAULT_FEED_URL, MiFirmConfig


def test_defaults():
    config = MiFirmConfig()
    assert config.output_directory == Path("Firmware Files")
    assert config.log_level == "INFO"
    assert config.log_file is None
    assert config.feed_url == DEFAULT_FEED_URL


def test_log_level_normalized():
    assert MiFirmConfig(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        MiFirmConfig(log_level="chatty")


@pytest.mark.parametrize(
    "overrides",
    [{"output_directory": ""}, {"feed_url": "ftp://example.com"}, {"feed_timeout": 0}],
)
def test_invalid_values(overrides):
    with pytest.raises(ValidationError):
        MiFirmConfig(**overrides)


def test_json_round_trip(tmp_path):
    path = tmp_path / "conf" / "mifirm.json"
    MiFirmConfig(output_directory=tmp_path / "out", log_file="mifirm.log").to_json(path)

    loaded = MiFirmConfig.from_json(path)

    assert loaded.output_directory == tmp_path / "out"
    assert loaded.log_file == "mifirm.log"


def test_from_json_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        MiFirmConfig.from_json(tmp_path / "absent.json")


def test_from_json_invalid(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValueError, match="Invalid JSON"):
        MiFirmConfig.from_json(path)


def test_from_json_partial(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"log_level": "warning"}))
    assert MiFirmConfig.from_json(path).log_level == "WARNING"
