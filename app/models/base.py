# app/models/base.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.db.base_class import Base  # noqa: F401  (re-exported for create_all)


class CamelModel(BaseModel):
    """API schemas speak camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
