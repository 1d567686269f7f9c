"""Tests for the command-line interface.

WHY: The CLI is how presets get tuned by hand. It must write the same
chunks the library produces, keep stdout clean for piping, and exit with
code 1 on bad input rather than a traceback.
"""

import io
import json

import pytest

from subtitle_engine.cli import build_parser, main

TRANSCRIPT = {
    "language": "en",
    "words": [
        {"text": "Hello", "start": 0.0, "end": 0.5},
        {"text": "world.", "start": 0.55, "end": 1.0},
        {"text": "Love", "start": 2.0, "end": 2.4},
        {"text": "this", "start": 2.45, "end": 2.8},
        {"text": "channel", "start": 2.85, "end": 3.4},
    ],
}


@pytest.fixture
def transcript_file(tmp_path):
    path = tmp_path / "transcript.json"
    path.write_text(json.dumps(TRANSCRIPT), encoding="utf-8")
    return path


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["in.json"])
        assert args.mode == "TALKING_HEAD"
        assert args.output_format == "json"
        assert args.validate is True
        assert args.output is None

    def test_mode_is_case_insensitive(self):
        args = build_parser().parse_args(["in.json", "--mode", "cinematic_clip"])
        assert args.mode == "CINEMATIC_CLIP"

    def test_unknown_mode_is_usage_error(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["in.json", "--mode", "VLOG"])
        assert exc.value.code == 2

    def test_no_validate(self):
        assert build_parser().parse_args(["in.json", "--no-validate"]).validate is False


class TestMain:

    def test_json_to_stdout(self, transcript_file, capsys):
        main([str(transcript_file)])
        data = json.loads(capsys.readouterr().out)
        assert data["mode"] == "TALKING_HEAD"
        assert [c["textLines"] for c in data["chunks"]] == [["Hello world."], ["Love this channel"]]
        assert data["decorations"] == {"tokens": []}

    def test_srt_to_file(self, transcript_file, tmp_path, capsys):
        out = tmp_path / "captions.srt"
        main([str(transcript_file), "-o", str(out), "--format", "srt"])
        content = out.read_text(encoding="utf-8")
        assert content.startswith("1\n00:00:00,000 --> 00:00:01,000\nHello world.\n")
        assert "2\n00:00:02,000 --> " in content
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Wrote 2 chunks" in captured.err

    def test_decoration_flags(self, transcript_file, capsys):
        main([str(transcript_file), "--highlight-keywords", "--emoji"])
        tokens = json.loads(capsys.readouterr().out)["decorations"]["tokens"]
        kinds = {t["kind"] for t in tokens}
        assert kinds == {"WORD", "EMOJI"}
        assert any(t["text"] == "channel" for t in tokens)

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(TRANSCRIPT)))
        main(["-", "--mode", "CINEMATIC_CLIP"])
        assert json.loads(capsys.readouterr().out)["mode"] == "CINEMATIC_CLIP"

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "missing.json")])
        assert exc.value.code == 1
        assert "Could not read" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{\"words\": [", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1
        assert "Could not parse transcript JSON" in capsys.readouterr().err

    def test_schema_error_names_location(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"words": [{"text": "Hi", "start": 0.0}]}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1
        assert "Invalid transcript at words/0" in capsys.readouterr().err

    def test_out_of_order_words(self, tmp_path, capsys):
        path = tmp_path / "unordered.json"
        path.write_text(json.dumps({"words": [
            {"text": "late", "start": 2.0, "end": 2.5},
            {"text": "early", "start": 1.0, "end": 1.5},
        ]}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1
        assert "out of order" in capsys.readouterr().err
