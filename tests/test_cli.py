"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from kinko.cli import app

from generate_test_audio import RO, CHI, generate_note_sequence, save_wav

runner = CliRunner()


@pytest.fixture
def recording(tmp_path):
    audio = generate_note_sequence([(RO, 0.5), (None, 1.2), (CHI, 0.5)])
    return save_wav("take.wav", audio, directory=str(tmp_path))


class TestTranscribeCommand:
    """Tests for `kinko transcribe`."""

    def test_writes_json(self, recording, tmp_path):
        output = tmp_path / "scores" / "take.json"
        result = runner.invoke(app, ["transcribe", recording, "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Transcription complete" in result.output

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["title"] == "take"
        assert len(data["phrases"]) == 2
        assert data["metadata"]["original_file"] == "take.wav"
        assert data["metadata"]["format"] == "WAV"

    def test_json_to_stdout(self, recording):
        result = runner.invoke(app, ["transcribe", recording, "--json", "--title", "Tsuru"])

        assert result.exit_code == 0, result.output
        assert '"tempo"' in result.output
        assert "Tsuru" in result.output
        assert "Loading audio" not in result.output

    def test_options(self, recording, tmp_path):
        output = tmp_path / "take.json"
        result = runner.invoke(
            app,
            [
                "transcribe",
                recording,
                "--instrument",
                "shakuhachi",
                "--comparator",
                "cents",
                "--tempo-method",
                "notes",
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        fingerings = [
            n["fingering"]
            for phrase in json.loads(output.read_text(encoding="utf-8"))["phrases"]
            for n in phrase["notes"]
        ]
        assert fingerings == ["ro", "chi"]

    def test_config_file(self, recording, tmp_path):
        config = tmp_path / "kinko.yaml"
        config.write_text("transcription:\n  title: From config\n", encoding="utf-8")
        output = tmp_path / "take.json"

        result = runner.invoke(
            app, ["transcribe", recording, "-c", str(config), "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        # The file stem wins over the configured title
        assert json.loads(output.read_text(encoding="utf-8"))["title"] == "take"

    def test_verbose_timing_summary(self, recording, tmp_path):
        output = tmp_path / "take.json"
        result = runner.invoke(app, ["transcribe", recording, "-v", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Timing Summary" in result.output
        assert "transcribe:" in result.output
        assert "Total:" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["transcribe", str(tmp_path / "missing.wav")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "take.mp4"
        path.write_bytes(b"\x00" * 16)
        result = runner.invoke(app, ["transcribe", str(path)])
        assert result.exit_code == 1
        assert "Unsupported format" in result.output

    def test_invalid_option(self, recording):
        result = runner.invoke(app, ["transcribe", recording, "--comparator", "semitones"])
        assert result.exit_code == 1

    def test_unknown_instrument(self, recording):
        result = runner.invoke(app, ["transcribe", recording, "--instrument", "ney"])
        assert result.exit_code == 1
        assert "Unknown instrument" in result.output


class TestOtherCommands:
    """Tests for `kinko chart` and `kinko info`."""

    def test_chart(self):
        result = runner.invoke(app, ["chart"])
        assert result.exit_code == 0
        assert "Fingering Chart" in result.output

    def test_info(self, recording):
        result = runner.invoke(app, ["info", recording])
        assert result.exit_code == 0
        assert "22050" in result.output
        assert "Channels: 1" in result.output

    def test_info_missing_file(self, tmp_path):
        result = runner.invoke(app, ["info", str(tmp_path / "missing.wav")])
        assert result.exit_code == 1
