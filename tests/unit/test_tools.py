"""Tests for the syft, grype and sbomqs wrappers."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sbomfix.errors import SbomGenerationError, ScanError
from sbomfix.sbom.models import SbomHandle, ScoreSource
from sbomfix.sbom.tools import (
    GrypeScanner,
    QualityScorer,
    SyftGenerator,
    parse_quality_output,
    syft_input,
)
from sbomfix.source.models import ContainerImage, LocalPath, RemoteRepository


@pytest.fixture
def handle(tmp_path: Path) -> SbomHandle:
    path = tmp_path / "abc.cyclonedx.json"
    path.write_text("{}")
    return SbomHandle(digest="abc", path=path)


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    return MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)


class TestSyftInput:
    def test_directory(self, tmp_path: Path):
        assert syft_input(LocalPath(tmp_path)) == f"dir:{tmp_path}"

    def test_file(self, tmp_path: Path):
        f = tmp_path / "app.jar"
        f.write_bytes(b"PK")
        assert syft_input(LocalPath(f)) == f"file:{f}"

    def test_remote_uses_checkout(self, tmp_path: Path):
        locator = RemoteRepository(url="https://h/r", checkout=tmp_path)
        assert syft_input(locator) == f"dir:{tmp_path}"

    def test_image(self):
        assert syft_input(ContainerImage("nginx:1.25")) == "nginx:1.25"


class TestSyftGenerator:
    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_success(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout='{"bomFormat": "CycloneDX"}')
        content = SyftGenerator(timeout=5).generate(ContainerImage("alpine"))
        assert content == '{"bomFormat": "CycloneDX"}'
        assert mock_run.call_args.args[0] == [
            "syft",
            "scan",
            "alpine",
            "-o",
            "cyclonedx-json",
            "-q",
        ]
        assert mock_run.call_args.kwargs["timeout"] == 5

    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_nonzero_exit(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stderr="could not fetch image", returncode=1)
        with pytest.raises(SbomGenerationError, match="could not fetch image"):
            SyftGenerator().generate(ContainerImage("nope"))

    @patch("sbomfix.sbom.tools.subprocess.run", side_effect=FileNotFoundError)
    def test_not_installed(self, _run):
        with pytest.raises(SbomGenerationError, match="not installed"):
            SyftGenerator().generate(ContainerImage("alpine"))

    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_invalid_json(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout="not json")
        with pytest.raises(SbomGenerationError, match="invalid JSON"):
            SyftGenerator().generate(ContainerImage("alpine"))

    @patch(
        "sbomfix.sbom.tools.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="syft", timeout=1),
    )
    def test_timeout(self, _run):
        with pytest.raises(SbomGenerationError, match="timed out"):
            SyftGenerator(timeout=1).generate(ContainerImage("alpine"))


class TestGrypeScanner:
    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_success(self, mock_run: MagicMock, handle: SbomHandle):
        mock_run.return_value = _completed(stdout="requests 2.25.0 2.31.0 python")
        assert GrypeScanner().scan(handle) == "requests 2.25.0 2.31.0 python"
        args = mock_run.call_args.args[0]
        assert args == ["grype", f"sbom:{handle.path}", "--only-fixed", "-q"]
        assert mock_run.call_args.kwargs["stderr"] == subprocess.STDOUT

    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_no_findings(self, mock_run: MagicMock, handle: SbomHandle):
        mock_run.return_value = _completed(stdout="")
        assert GrypeScanner().scan(handle) == ""

    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_failure(self, mock_run: MagicMock, handle: SbomHandle):
        mock_run.return_value = _completed(stdout="db update failed", returncode=1)
        with pytest.raises(ScanError, match="Error running Grype"):
            GrypeScanner().scan(handle)

    @patch("sbomfix.sbom.tools.subprocess.run", side_effect=FileNotFoundError)
    def test_not_installed(self, _run, handle: SbomHandle):
        with pytest.raises(ScanError, match="not installed"):
            GrypeScanner().scan(handle)

    @patch(
        "sbomfix.sbom.tools.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="grype", timeout=1),
    )
    def test_timeout(self, _run, handle: SbomHandle):
        with pytest.raises(ScanError, match="timed out"):
            GrypeScanner(timeout=1).scan(handle)


class TestQualityScorer:
    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_full_json_score(self, mock_run: MagicMock, handle: SbomHandle):
        mock_run.return_value = _completed(
            stdout='{"files": [{"file_name": "x", "avg_score": 7.4}]}'
        )
        score = QualityScorer().score(handle)
        assert score.value == 7.4
        assert score.source is ScoreSource.FULL

    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_basic_score(self, mock_run: MagicMock, handle: SbomHandle):
        mock_run.return_value = _completed(stdout="6.2\tcyclonedx\t1.5\tsbom.json\n")
        score = QualityScorer().score(handle)
        assert score.value == 6.2
        assert score.source is ScoreSource.BASIC

    @patch("sbomfix.sbom.tools.subprocess.run", side_effect=FileNotFoundError)
    def test_tool_missing(self, _run, handle: SbomHandle):
        score = QualityScorer().score(handle)
        assert score.value is None
        assert score.source is ScoreSource.UNAVAILABLE
        assert "not installed" in score.detail

    @patch(
        "sbomfix.sbom.tools.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="sbomqs", timeout=30),
    )
    def test_timeout_never_raises(self, _run, handle: SbomHandle):
        assert QualityScorer().score(handle).source is ScoreSource.UNAVAILABLE

    @patch("sbomfix.sbom.tools.subprocess.run")
    def test_nonzero_exit(self, mock_run: MagicMock, handle: SbomHandle):
        mock_run.return_value = _completed(returncode=2)
        assert QualityScorer().score(handle).source is ScoreSource.UNAVAILABLE

    def test_unexpected_json_layout(self):
        score = parse_quality_output('{"version": 1}')
        assert score.source is ScoreSource.UNAVAILABLE

    def test_nothing_parseable(self):
        assert parse_quality_output("error: no sbom").source is ScoreSource.UNAVAILABLE

    def test_to_dict(self):
        score = parse_quality_output('{"files": [{"avg_score": 9}]}')
        assert score.to_dict() == {"score": 9.0, "source": "full", "detail": ""}
