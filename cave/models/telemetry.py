"""Execution report sent after a non-interactive run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ExecutionData(BaseModel):
    """Anonymous outcome of one ``cave run``."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    time_execution: int  # milliseconds
    valid_result: bool
    timezone: str  # UTC offset, e.g. "+02:00"
    version: str
    id_docker: str
