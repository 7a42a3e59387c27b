from typing import Generic, Iterable, List, Optional, Type, TypeVar

from loguru import logger
from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session

from shop_orders.db import storage_errors
from shop_orders.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class Collection(Generic[ModelT]):
    """Typed access to one mapped table through a session.

    ``add`` and ``remove`` only stage changes; nothing reaches the store until
    the owning context's ``save()``. Reads always query the store.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def add(self, entity: ModelT) -> ModelT:
        logger.debug("Staging new {name} row", name=self.name)
        self.session.add(entity)
        return entity

    def add_all(self, entities: Iterable[ModelT]) -> List[ModelT]:
        entities = list(entities)
        logger.debug(
            "Staging {count} new {name} rows",
            count=len(entities),
            name=self.name,
        )
        self.session.add_all(entities)
        return entities

    def remove(self, entity: ModelT) -> None:
        logger.debug("Staging removal of {name} id={id}", name=self.name, id=entity.id)
        with storage_errors(f"{self.name}.remove"):
            self.session.delete(entity)

    def find(self, entity_id: int) -> Optional[ModelT]:
        with storage_errors(f"{self.name}.find"):
            return self.session.get(self.model, entity_id)

    def all(self) -> List[ModelT]:
        with storage_errors(f"{self.name}.all"):
            return list(self.session.scalars(select(self.model).order_by(self.model.id)))

    def count(self) -> int:
        with storage_errors(f"{self.name}.count"):
            return self.session.scalar(select(func.count()).select_from(self.model))

    def any(self) -> bool:
        with storage_errors(f"{self.name}.any"):
            return bool(self.session.scalar(select(exists().select_from(self.model))))
