# swimschool/services/student_id.py
from __future__ import annotations

import logging
import random
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from swimschool.crud.counter import counter_crud
from swimschool.services.dates import buddhist_year_suffix, local_today

logger = logging.getLogger(__name__)

# (trecho no título em maiúsculas, trecho no id em minúsculas, prefixo)
_PREFIX_RULES = [
    ("COURSE A", "course-a", "CA"),
    ("COURSE B", "course-b", "CB"),
    ("COURSE C", "course-c", "CC"),
    ("COURSE D", "course-d", "CD"),
    ("BABY", "baby", "CBB"),
]
DEFAULT_PREFIX = "CN"

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def prefix_for_course(course_id: str, course_title: str) -> str:
    title = (course_title or "").upper()
    cid = (course_id or "").lower()
    for title_key, id_key, prefix in _PREFIX_RULES:
        if title_key in title or id_key in cid:
            return prefix
    return DEFAULT_PREFIX

def format_student_id(id_prefix: str, running: int) -> str:
    return f"{id_prefix}{running:03d}"

def generate_student_id(
    db: Session,
    course_id: str,
    course_title: str,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Gera o código do aluno: <prefixo><AA><NNN>, ex.: CA68001.

    O número corrente vem do contador `prefixo+ano`, incrementado de forma
    atômica. Se o banco falhar, não bloqueamos a inscrição: devolvemos um
    sufixo aleatório de 4 dígitos. Esse caminho pode colidir e a colisão não
    é corrigida.
    """
    # ano civil da escola, não do servidor
    today = today or local_today(_utcnow())
    id_prefix = f"{prefix_for_course(course_id, course_title)}{buddhist_year_suffix(today)}"
    try:
        running = counter_crud.next_value(db, id_prefix)
    except SQLAlchemyError:
        logger.exception("Counter transaction failed for %s; using random suffix", id_prefix)
        db.rollback()
        return f"{id_prefix}{(rng or random).randint(0, 9999):04d}"
    return format_student_id(id_prefix, running)
