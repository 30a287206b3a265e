from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer
from swimschool.db.base_class import Base

class Counter(Base):
    """Contador do número corrente, chave = prefixo + ano (ex.: CA68)."""
    __tablename__ = "counters"
    key: Mapped[str] = mapped_column(String(16), primary_key=True)
    count: Mapped[int] = mapped_column(Integer, default=0)
