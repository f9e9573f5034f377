from datetime import datetime
from typing import Optional

from app.schemas import CamelModel


class GameOut(CamelModel):
    id: int
    name: str
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
