from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ItemT = TypeVar("ItemT")

class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class Page(CamelModel, Generic[ItemT]):
    """List envelope body shared by every paginated listing"""
    count: int
    lastkey: Optional[Any] = None
    data: List[ItemT] = []
