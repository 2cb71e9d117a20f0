from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Connection(BaseModel):
    id: int | None = None
    user_id: int | None = None
    address: str = ""
    status: str = "Active"
    created_at: datetime | None = None
