"""Status report models."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

CheckStatus = Literal["pass", "fail", "warn", "info"]


class Check(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    status: CheckStatus
    details: Optional[str] = None
    href: Optional[str] = None


class CheckSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    checks: List[Check] = Field(default_factory=list)

    def check(self, check_id: str) -> Optional[Check]:
        return next((c for c in self.checks if c.id == check_id), None)


class Report(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chain_id: int = Field(alias="chainId")
    generated_at: str = Field(alias="generatedAt")
    sections: List[CheckSection] = Field(default_factory=list)
    context: Optional[Dict[str, Any]] = None

    def section(self, section_id: str) -> Optional[CheckSection]:
        return next((s for s in self.sections if s.id == section_id), None)

    def all_checks(self) -> List[Check]:
        return [c for s in self.sections for c in s.checks]

    def count(self, status: str) -> int:
        return sum(1 for c in self.all_checks() if c.status == status)

    def to_json(self) -> Dict[str, Any]:
        """JSON shape served to callers; `context` keeps explicit nulls."""
        out: Dict[str, Any] = {
            "chainId": self.chain_id,
            "generatedAt": self.generated_at,
            "sections": [s.model_dump(exclude_none=True) for s in self.sections],
        }
        if self.context is not None:
            out["context"] = dict(self.context)
        return out
