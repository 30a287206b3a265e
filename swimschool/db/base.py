# swimschool/db/base.py
from swimschool.db.base_class import Base  # mantém

# 🔴 IMPORTE TODOS OS MODELS AQUI (alembic e create_all leem Base.metadata)
from swimschool.models.user import UserProfile  # noqa: F401
from swimschool.models.course import Course  # noqa: F401
from swimschool.models.enrollment import Enrollment  # noqa: F401
from swimschool.models.attendance import Attendance  # noqa: F401
from swimschool.models.notification import Notification  # noqa: F401
from swimschool.models.leave_request import LeaveRequest  # noqa: F401
from swimschool.models.counter import Counter  # noqa: F401

__all__ = ["Base"]
