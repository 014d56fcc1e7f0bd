"""
Food Ordering API — Health schema
"""
from datetime import datetime
from pydantic import BaseModel


class HealthData(BaseModel):
    status: str
    service: str
    version: str
    timestamp: datetime
