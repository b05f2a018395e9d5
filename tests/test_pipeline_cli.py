"""
Configuration loading and the run_pipeline command line.
Run: pytest tests/test_pipeline_cli.py -v
"""
import shutil
from pathlib import Path

import pytest

from scripts.config_loader import deep_merge, load_effective_config, resolve_settings
from scripts.run_pipeline import main

REPO_ROOT = Path(__file__).resolve().parent.parent

SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "Hi ,Tony !\n"
    "你好，Tony Stark！\n"
    "\n"
    "2\n"
    "00:00:03,000 --> 00:00:04,000\n"
    "Pepper走了\n"
)


@pytest.fixture
def base(tmp_path):
    """A project root holding only the shipped default config."""
    shutil.copy(REPO_ROOT / "config.default.yaml", tmp_path / "config.default.yaml")
    return tmp_path


def test_deep_merge():
    merged = deep_merge(
        {"a": {"b": 1, "c": [1, 2]}, "d": "x"},
        {"a": {"c": [3]}, "e": True},
    )
    assert merged == {"a": {"b": 1, "c": [3]}, "d": "x", "e": True}


class TestConfig:
    def test_defaults(self, base):
        cfg, has_local = load_effective_config(base)
        settings = resolve_settings(cfg)
        assert has_local is False
        assert settings.format == "subtitles"
        assert settings.credit_patterns == ("Synced and corrected by",)
        assert settings.sentinel == "\n"
        assert settings.reformat is True
        assert settings.names_path is None

    def test_local_override(self, base):
        (base / "config.yaml").write_text(
            "format: captions\ncaptions:\n  credit_patterns: ['Subtitles by']\n",
            encoding="utf-8",
        )
        cfg, has_local = load_effective_config(base)
        settings = resolve_settings(cfg)
        assert has_local is True
        assert settings.format == "captions"
        assert settings.credit_patterns == ("Subtitles by",)
        assert settings.suffix == ".processed.srt"

    def test_missing_default(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_effective_config(tmp_path)

    def test_root_must_be_mapping(self, base):
        (base / "config.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_effective_config(base)

    def test_empty_local_file(self, base):
        (base / "config.yaml").write_text("", encoding="utf-8")
        cfg, has_local = load_effective_config(base)
        assert has_local is True
        assert cfg == load_effective_config(base, local_name="absent.yaml")[0]

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            resolve_settings({"format": "vtt"})


class TestCli:
    def test_translate_and_write(self, base):
        src = base / "episode.srt"
        src.write_text(SRT, encoding="utf-8")
        names = base / "names.txt"
        names.write_text("Tony Stark = 托尼·斯塔克\nPepper Potts = 佩珀/波茨\n", encoding="utf-8")
        outdir = base / "out"

        rc = main(["--input", str(src), "--names", str(names), "--outdir", str(outdir)], base=base)

        assert rc == 0
        out = (outdir / "episode.processed.srt").read_bytes().decode("utf-8")
        assert out == (
            "1\r\n00:00:01,000 --> 00:00:02,000\r\nHi, Tony!\r\n你好，托尼·斯塔克!\r\n\r\n"
            "2\r\n00:00:03,000 --> 00:00:04,000\r\n佩珀走了\r\n\r\n"
        )

    def test_list_names(self, base, capsys):
        src = base / "episode.srt"
        src.write_text(SRT, encoding="utf-8")

        rc = main(["--input", str(src), "--list-names", "--outdir", str(base / "out")], base=base)

        assert rc == 0
        assert capsys.readouterr().out.splitlines() == ["Pepper", "Tony Stark"]
        assert not (base / "out").exists()

    def test_captions(self, base):
        src = base / "raw.srt"
        src.write_text(
            "1\nTS1\n♪ la la\nla ♪\n\n2\nTS2\nSynced and corrected by X\n",
            encoding="utf-8",
        )
        rc = main(["--input", str(src), "--format", "captions", "--outdir", str(base)], base=base)
        assert rc == 0
        assert (base / "raw.processed.srt").read_bytes() == "1\r\nTS1\r\n# la la la #\r\n\r\n".encode("utf-8")

    def test_empty_input(self, base):
        src = base / "empty.srt"
        src.write_text("  \n", encoding="utf-8")
        assert main(["--input", str(src)], base=base) == 1

    def test_malformed_input(self, base):
        src = base / "bad.srt"
        src.write_text("1\nTS\none\ntwo\nthree\n", encoding="utf-8")
        assert main(["--input", str(src), "--outdir", str(base / "out")], base=base) == 1
