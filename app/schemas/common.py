from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    database: str
