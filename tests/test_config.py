# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from link_scout.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("start_url: http://example.com/", ".yaml", None),
        (json.dumps({"start_url": "http://example.com/"}), ".json", None),
        ("{}", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{not json", ".json", ValueError),
        ("[1, 2]", ".json", TypeError),
        ("start_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert str(cfg.start_url) == "http://example.com/"


def test_defaults():
    cfg = CrawlerConfig(start_url="https://example.com/")
    assert cfg.concurrency == 10
    assert cfg.pool_size == 15
    assert cfg.navigation_timeout == 20.0
    assert cfg.wait_until == "domcontentloaded"
    assert cfg.blocked_extensions == [".pdf", ".zip", ".doc"]
    assert cfg.not_found_phrases == ["404", "page not found", "not found"]
    assert cfg.backend == "playwright"
    assert cfg.report_path == Path("errores_404.csv")
    assert cfg.origin == "https://example.com"


def test_pool_smaller_than_concurrency_rejected():
    with pytest.raises(ValidationError, match="pool_size"):
        CrawlerConfig(start_url="https://example.com/", concurrency=5, pool_size=2)


def test_extensions_and_phrases_normalized():
    cfg = CrawlerConfig(
        start_url="https://example.com/",
        blocked_extensions=["PDF", ".Zip", " "],
        not_found_phrases=["Seite Nicht Gefunden"],
    )
    assert cfg.blocked_extensions == [".pdf", ".zip"]
    assert cfg.not_found_phrases == ["seite nicht gefunden"]


def test_empty_phrases_rejected():
    with pytest.raises(ValidationError):
        CrawlerConfig(start_url="https://example.com/", not_found_phrases=[])


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        CrawlerConfig(start_url="https://example.com/", max_depth=3)


def test_with_overrides_revalidates():
    cfg = CrawlerConfig(start_url="https://example.com:8080/shop", concurrency=2, pool_size=4)
    updated = cfg.with_overrides(concurrency=4, backend=None, report_path="out.csv")
    assert updated.concurrency == 4
    assert updated.backend == "playwright"
    assert updated.report_path == Path("out.csv")
    assert updated.origin == "https://example.com:8080"
    with pytest.raises(ValidationError):
        cfg.with_overrides(concurrency=5)


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")
