"""
Read-only API routes exposing the current ACM snapshot
"""
from typing import List

from fastapi import APIRouter, HTTPException

from ..models.acm import CostMatrixRow, DocumentTable, RateTable, SchemeConfig, VersionStamp
from ..services.snapshot_service import snapshot_service

router = APIRouter(prefix="/acm", tags=["acm"])


@router.get("/version", response_model=VersionStamp)
async def get_version():
    """Edition of the ACM guide and table currently in use"""
    return snapshot_service.current().version


@router.get("/rates", response_model=RateTable)
async def get_rates():
    return snapshot_service.current().rates


@router.get("/documents", response_model=DocumentTable)
async def get_documents():
    return snapshot_service.current().documents


@router.get("/schemes", response_model=List[SchemeConfig])
async def get_schemes():
    """Scheme configuration: allowed variants, trainer types and payment flow"""
    return list(snapshot_service.current().schemes.values())


@router.get("/schemes/{scheme}", response_model=SchemeConfig)
async def get_scheme(scheme: str):
    for key, config in snapshot_service.current().schemes.items():
        if key.value == scheme.lower():
            return config
    raise HTTPException(status_code=404, detail=f"Scheme {scheme} not found")


@router.get("/matrix", response_model=List[CostMatrixRow])
async def get_matrix():
    """Cost matrix scenario rows in lookup order"""
    return snapshot_service.current().matrix

