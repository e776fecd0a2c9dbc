# /guidebot/models/api.py

from pydantic import BaseModel, Field
from typing import Dict, Optional
from datetime import datetime

# Response envelope shared by every endpoint.

class APIResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    version: str
