# app/crud/base.py
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from sqlalchemy import JSON
from sqlalchemy.orm import Session

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)

def merge_allowed(target: Any, updates: Dict[str, Any], allowed: Iterable[str]) -> List[str]:
    """Aplica em ``target`` só os campos da allow-list presentes em ``updates``.

    Devolve os nomes efetivamente alterados (lista vazia = nada válido).
    """
    changed = []
    for field in allowed:
        if field in updates:
            setattr(target, field, updates[field])
            changed.append(field)
    return changed

class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    # campos que o PUT/PATCH pode alterar; vazio = todos os enviados
    updatable_fields: tuple[str, ...] = ()

    def __init__(self, model: Type[ModelType]): self.model = model

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        # colunas JSON não aceitam date/datetime/BaseModel: serializa antes
        columns = self.model.__table__.columns
        out = {}
        for key, value in data.items():
            if key in columns and isinstance(columns[key].type, JSON):
                value = jsonable_encoder(value)
            out[key] = value
        return out

    def before_save(self, db: Session, obj: ModelType) -> None:
        """Gancho para recalcular campos derivados antes do commit."""

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def create(self, db: Session, obj_in: CreateSchema, extra: Dict[str, Any] | None=None) -> ModelType:
        data = obj_in.model_dump(exclude_none=True)
        if extra: data.update(extra)
        obj = self.model(**self._prepare(data))
        self.before_save(db, obj)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: UpdateSchema | Dict[str, Any]) -> List[str]:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        data = self._prepare(data)
        allowed = self.updatable_fields or tuple(data)
        changed = merge_allowed(db_obj, data, allowed)
        if changed:
            self.before_save(db, db_obj)
            db.add(db_obj); db.commit(); db.refresh(db_obj)
        return changed

    def remove(self, db: Session, id: Any) -> Optional[ModelType]:
        obj = self.get(db, id)
        if not obj: return None
        db.delete(obj); db.commit(); return obj
