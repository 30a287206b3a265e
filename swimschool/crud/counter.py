from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from swimschool.crud.base import CRUDBase
from swimschool.models.counter import Counter

class CRUDCounter(CRUDBase[Counter]):
    def next_value(self, db: Session, key: str) -> int:
        """
        Incrementa e lê o contador numa única transação.

        O UPDATE ... RETURNING é atômico no banco, então dois chamadores
        concorrentes nunca recebem o mesmo valor. Na primeira vez a linha não
        existe: inserimos com 1 dentro de um savepoint; se outro chamador inseriu
        antes (IntegrityError), só o savepoint é desfeito e o UPDATE é repetido.
        """
        stmt = (
            update(Counter)
            .where(Counter.key == key)
            .values(count=Counter.count + 1)
            .returning(Counter.count)
        )
        value = db.execute(stmt).scalar_one_or_none()
        if value is None:
            try:
                with db.begin_nested():
                    db.add(Counter(key=key, count=1))
                value = 1
            except IntegrityError:
                value = db.execute(stmt).scalar_one()
        db.commit()
        return int(value)

counter_crud = CRUDCounter(Counter)
