from pydantic import BaseModel


class ProductStatistics(BaseModel):
    averageScore: float
    significantSummary: str
