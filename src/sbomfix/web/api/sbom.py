"""SBOM generation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

router = APIRouter(tags=["sbom"])


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sbom_source: str = Field("", alias="sbomSource")


@router.post("/generate-sbom")
def generate_sbom(body: GenerateRequest, request: Request):
    return _generate(request, body.sbom_source)


@router.get("/generate-sbom")
def generate_sbom_query(request: Request, source: str = ""):
    return _generate(request, source)


def _generate(request: Request, source: str) -> dict:
    service = request.app.state.service
    handle, content = service.generate_sbom(source)
    return {
        "message": "SBOM generated successfully",
        "format": "CycloneDX JSON",
        "file": str(handle.path),
        "sbomId": handle.digest,
        "sbomData": content,
    }
