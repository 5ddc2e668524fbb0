"""
Report Schemas
Pydantic models for the dashboard statistics response.
"""

from pydantic import BaseModel, ConfigDict, Field


class ValueGrowth(BaseModel):
    """Metric with a value and its growth against the previous period."""
    
    value: float = Field(..., description="Metric value for the current period")
    growth: float = Field(..., description="Percentage change vs previous period")


class CountedMetric(BaseModel):
    """Metric with value, count and growth."""
    
    count: int = Field(..., description="Number of documents")
    value: float = Field(..., description="Total amount")
    growth: float = Field(..., description="Percentage change vs previous period")


class OverdueSummary(BaseModel):
    """All-time overdue totals (not period-scoped)."""
    
    count: int = Field(..., description="Number of overdue documents")
    value: float = Field(..., description="Total amount overdue")


class ChartPoint(BaseModel):
    """One bucket of the revenue chart."""
    
    name: str = Field(..., description="Day number, month label or year")
    revenue: float = Field(..., description="Paid revenue in the bucket")


class PieSlice(BaseModel):
    """One slice of the invoice status distribution."""
    
    name: str = Field(..., description="Paid, Pending or Overdue")
    value: int = Field(..., description="Number of current-period invoices")
    color: str = Field(..., description="Display colour")


class DashboardStats(BaseModel):
    """Complete dashboard statistics report."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    revenue: ValueGrowth
    invoices: ValueGrowth
    vat: ValueGrowth
    outstanding: CountedMetric
    paid_invoices: CountedMetric = Field(..., alias="paidInvoices")
    overdue: OverdueSummary
    quotations: CountedMetric
    accepted_quotations: CountedMetric = Field(..., alias="acceptedQuotations")
    overdue_quotations: OverdueSummary = Field(..., alias="overdueQuotations")
    chart_data: list[ChartPoint] = Field(..., alias="chartData")
    pie_data: list[PieSlice] = Field(..., alias="pieData")


class ErrorResponse(BaseModel):
    """Error envelope; never carries partial statistics."""
    
    error: str = Field(..., description="Human-readable failure message")
    error_code: str = Field(..., description="Machine-readable error code")
