"""Scan, remediation and semantic-analysis endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from sbomfix.service import ScanReport

router = APIRouter(tags=["remediation"])


class ScanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sbom_file: str | None = Field(None, alias="sbomFile")
    use_advanced: bool = Field(False, alias="useAdvanced")


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str | None = None
    scan_data: str | None = Field(None, alias="scanData")
    sbom_file: str | None = Field(None, alias="sbomFile")


@router.post("/scan-sbom")
def scan_sbom(request: Request, body: ScanRequest | None = None):
    body = body or ScanRequest()
    report = request.app.state.service.scan(
        sbom_path=body.sbom_file,
        use_advanced=body.use_advanced,
    )
    return _scan_payload(report, request)


@router.get("/scan-sbom")
def scan_sbom_current(request: Request):
    report = request.app.state.service.scan()
    return _scan_payload(report, request)


@router.get("/remediate")
def remediate(request: Request):
    report = request.app.state.service.remediate()
    result = report.remediation
    return {
        "message": "Remediation script generated successfully",
        "remediationScript": result.script,
        "engine": result.engine.value if result.engine else None,
        "warning": result.warning,
        "ollamaModel": request.app.state.config.ollama_model,
        "ollamaRawResponse": result.script,
    }


@router.post("/llamaindex-analyze")
def llamaindex_analyze(request: Request, body: AnalyzeRequest | None = None):
    body = body or AnalyzeRequest()
    scan_data, analysis = request.app.state.service.analyze(
        query=body.query,
        scan_data=body.scan_data,
        sbom_path=body.sbom_file,
    )
    return {
        "scanData": scan_data,
        "analysisResponse": analysis,
        "query": body.query,
    }


def _scan_payload(report: ScanReport, request: Request) -> dict:
    result = report.remediation
    return {
        "message": "Grype scan and remediation completed successfully",
        "scanResult": report.scan_text,
        "remediationScript": result.script,
        "remediationCommands": result.commands,
        "markdownResponse": f"```bash\n{result.commands}\n```",
        "pkgType": report.ecosystem.label,
        "qualityScore": report.quality.to_dict() if report.quality else None,
        "usedLlamaIndex": result.used_semantic,
        "engine": result.engine.value if result.engine else None,
        "warning": result.warning,
        "ollamaModel": request.app.state.config.ollama_model,
        "ollamaRawResponse": result.script,
    }
