from __future__ import annotations

from pathlib import Path

import pytest

from board_digest.config.loader import ConfigError, PipelineConfig, build_pipeline_config, load_config


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.output_path is None
    assert cfg.pipeline.null_sentinels == frozenset({"#VALUE!", "#N/A"})
    assert cfg.pipeline.top_n == 20
    # omitted keys fall back to defaults
    assert cfg.pipeline.identity_titles == ("Name",)
    assert cfg.pipeline.currency_symbol == "₹"


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(missing)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("source_directory: ./data\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_bad_top_n(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("top_n: 20", "top_n: 0")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("source_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_load_config_non_mapping_root(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_config(write_config)


def test_keywords_are_lowercased_and_sentinels_uppercased():
    cfg = build_pipeline_config(
        {
            "source_directory": "./data",
            "null_sentinels": [" #n/a "],
            "pipeline_keywords": ["Opportunity"],
            "output_path": "./out/context.md",
        }
    )
    assert cfg.null_sentinels == frozenset({"#N/A"})
    assert cfg.pipeline_keywords == ("opportunity",)
    assert cfg.execution_keywords == PipelineConfig().execution_keywords


def test_output_path_is_read(write_config: Path):
    write_config.write_text(
        "source_directory: ./data\noutput_path: ./out/context.md\n", encoding="utf-8"
    )
    assert load_config(write_config).output_path == "./out/context.md"
