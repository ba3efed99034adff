"""
Tests for the cvmatch command line interface.
"""

import pytest
from typer.testing import CliRunner

from cvmatch.cli import app


@pytest.fixture
def runner():
    return CliRunner()


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestBand:
    def test_band(self, runner):
        result = runner.invoke(app, ["band", "95000"])
        assert result.exit_code == 0
        assert "£90,000" in result.stdout
        assert "£125,000" in result.stdout

    def test_no_band(self, runner):
        result = runner.invoke(app, ["band", "0"])
        assert result.exit_code == 1


class TestScore:
    def test_perfect_match(self, runner):
        result = runner.invoke(
            app,
            [
                "score",
                "--skills", "publicAffairs",
                "--salary-min", "80000",
                "--salary-max", "100000",
                "--job-skills", "public_affairs",
                "--job-min", "90000",
                "--job-max", "110000",
            ],
        )
        assert result.exit_code == 0
        assert "0.8000" in result.stdout
        assert "strong" in result.stdout

    def test_unknown_skill(self, runner):
        result = runner.invoke(app, ["score", "--skills", "juggling"])
        assert result.exit_code == 1
        assert "Unknown skill category" in result.stdout


class TestExtract:
    def test_text_file(self, runner, tmp_path, sample_cv_text):
        path = tmp_path / "jane.txt"
        path.write_text(sample_cv_text, encoding="utf-8")
        result = runner.invoke(app, ["extract", str(path), "--text"])
        assert result.exit_code == 0
        assert "plain_text" in result.stdout
        assert "Jane Smith" in result.stdout

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["extract", str(tmp_path / "missing.pdf")])
        assert result.exit_code == 1


class TestParse:
    def test_json(self, runner, tmp_path, sample_cv_text):
        path = tmp_path / "jane.txt"
        path.write_text(sample_cv_text, encoding="utf-8")
        result = runner.invoke(app, ["parse", str(path), "--json"])
        assert result.exit_code == 0
        assert '"email": "jane.smith@example.org"' in result.stdout


class TestBenchmark:
    def test_directory(self, runner, tmp_path, sample_cv_text):
        (tmp_path / "jane.txt").write_text(sample_cv_text, encoding="utf-8")
        (tmp_path / "notes.xyz").write_text("ignored", encoding="utf-8")
        result = runner.invoke(app, ["benchmark", str(tmp_path)])
        assert result.exit_code == 0
        assert "Processed" in result.stdout
        assert "plain_text" in result.stdout
