"""Tests for the epf-passbook command line."""

import json
from unittest.mock import patch

import pytest

from passbook.cli.main import main


@pytest.fixture
def sample_file(fixtures_path):
    return str(fixtures_path / "epf_passbook_sample.txt")


@pytest.fixture(autouse=True)
def no_env_settings(monkeypatch):
    monkeypatch.delenv("EPF_PASSBOOK_CONFIG", raising=False)


class TestParseCommand:
    """Tests for `epf-passbook parse`."""

    def test_json_output(self, sample_file, capsys):
        assert main(["parse", sample_file, "--text"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert data["memberInfo"]["uan"] == "100123456789"
        assert len(data["contributions"]) == 8

    def test_table_output(self, sample_file, capsys):
        assert main(["parse", sample_file, "--text", "--format", "table"]) == 0

        out = capsys.readouterr().out
        assert "RAVI KUMAR SHARMA" in out
        assert "Contributions (8 records):" in out
        assert "By Category:" in out

    def test_excel_report(self, sample_file, tmp_path, capsys):
        output = tmp_path / "passbook.xlsx"

        assert main(["parse", sample_file, "--text", "--excel", str(output)]) == 0

        assert output.exists()
        assert "Report written" in capsys.readouterr().err

    def test_config_file(self, sample_file, tmp_path, capsys):
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"defaults": {"pdf_type": "Custom"}}))

        assert main(["parse", sample_file, "--text", "--config", str(config)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["metadata"]["pdfType"] == "Custom"

    def test_config_from_environment(self, sample_file, tmp_path, monkeypatch, capsys):
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"defaults": {"pdf_type": "From Env"}}))
        monkeypatch.setenv("EPF_PASSBOOK_CONFIG", str(config))

        assert main(["parse", sample_file, "--text"]) == 0

        assert json.loads(capsys.readouterr().out)["metadata"]["pdfType"] == "From Env"

    def test_missing_config(self, sample_file, tmp_path, capsys):
        assert main(["parse", sample_file, "--text", "-c", str(tmp_path / "nope.json")]) == 1
        assert "Settings file not found" in capsys.readouterr().err

    def test_malformed_config(self, sample_file, tmp_path, capsys):
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"anchors": "oops"}))

        assert main(["parse", sample_file, "--text", "--config", str(config)]) == 1
        assert "Error: Settings section 'anchors' must be an object" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["parse", str(tmp_path / "missing.txt"), "--text"]) == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_pdf_goes_through_extractor(self, sample_text, capsys):
        with patch("passbook.parsers.epf.parser.extract_text", return_value=sample_text) as mock:
            assert main(["parse", "passbook.pdf", "--password", "pw"]) == 0

        assert mock.call_args.kwargs["password"] == "pw"
        assert json.loads(capsys.readouterr().out)["metadata"]["totalRecords"] == 8


class TestMain:

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_extract(self, capsys):
        with patch("passbook.cli.main.extract_text", return_value="decoded text"):
            assert main(["extract", "passbook.pdf"]) == 0

        assert "decoded text" in capsys.readouterr().out
