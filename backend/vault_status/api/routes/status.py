"""Protocol and vault status report routes."""

from __future__ import annotations

import logging

from eth_utils import is_hex_address
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from vault_status.api import dependencies as deps
from vault_status.chain.transport import RpcUnavailableError
from vault_status.services.protocol_report import ProtocolReportService
from vault_status.services.vault_report import VaultReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/status")


@router.get("/protocol-report")
async def get_protocol_report(service: ProtocolReportService = Depends(deps.get_protocol_service)):
    try:
        report = await service.build_protocol_report()
    except RpcUnavailableError as e:
        logger.error("Protocol report failed: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    return JSONResponse(content=report.to_json())


@router.get("/vault-report")
async def get_vault_report(
    vault: str = Query("", description="Vault address (0x-prefixed, 40 hex chars)"),
    service: VaultReportService = Depends(deps.get_vault_service),
):
    vault = vault.strip()
    if not vault:
        raise HTTPException(status_code=400, detail="vault is required")
    if not is_hex_address(vault):
        raise HTTPException(status_code=400, detail="Invalid vault address")
    try:
        report = await service.build_vault_report(vault)
    except RpcUnavailableError as e:
        logger.error("Vault report for %s failed: %s", vault, e)
        raise HTTPException(status_code=503, detail=str(e))
    return JSONResponse(content=report.to_json())
