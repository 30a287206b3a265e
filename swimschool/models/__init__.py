# swimschool/models/__init__.py
from swimschool.db.base_class import Base  # mantém

# Carrega módulos para registrar tabelas no metadata:
import swimschool.models.user           # noqa: F401
import swimschool.models.course         # noqa: F401
import swimschool.models.enrollment     # noqa: F401
import swimschool.models.attendance     # noqa: F401
import swimschool.models.notification   # noqa: F401
import swimschool.models.leave_request  # noqa: F401
import swimschool.models.counter        # noqa: F401

__all__ = ["Base"]
