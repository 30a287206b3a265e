# swimschool/schemas/dashboard.py
from typing import Any, Dict, List
from pydantic import BaseModel, Field

class MonthlyRevenue(BaseModel):
    name: str
    revenue: int

class DashboardStats(BaseModel):
    total_income: int = Field(alias="totalIncome")
    total_students: int = Field(alias="totalStudents")
    pending_payments: int = Field(alias="pendingPayments")
    monthly_revenue: List[MonthlyRevenue] = Field(alias="monthlyRevenue")
    # [{"name": "Jan 25", "<curso>": n, ...}] pronto para barras empilhadas
    monthly_enrollments: List[Dict[str, Any]] = Field(alias="monthlyEnrollments")
    course_names: List[str] = Field(alias="courseNames")
    instructor_load: Dict[str, int] = Field(alias="instructorLoad")
    status_breakdown: Dict[str, int] = Field(alias="statusBreakdown")

    model_config = {"populate_by_name": True}
