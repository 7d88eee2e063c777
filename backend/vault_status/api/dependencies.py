"""Shared service wiring for the API routes."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Request

from vault_status.chain.reader import ChainReader
from vault_status.core.config import ReportConfig, settings
from vault_status.services.protocol_report import ProtocolReportService
from vault_status.services.vault_report import VaultReportService


@lru_cache(maxsize=1)
def get_report_config() -> ReportConfig:
    return settings.report_config()


def get_reader(request: Request) -> ChainReader:
    """A fresh reader per request over the app-wide web3 connection."""
    return ChainReader(request.app.state.w3, multicall_address=settings.addresses.multicall3)


def get_protocol_service(reader: ChainReader = Depends(get_reader)) -> ProtocolReportService:
    return ProtocolReportService(get_report_config(), reader, settings)


def get_vault_service(reader: ChainReader = Depends(get_reader)) -> VaultReportService:
    return VaultReportService(get_report_config(), reader)
