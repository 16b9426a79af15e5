# ============================================================================
# FILE: vault/schemas/base.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Base schema: snake_case attributes in Python, camelCase keys in JSON"""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

def reject_null(value):
    """Shared check for optional update fields that may be omitted but not nulled"""
    if value is None:
        raise ValueError("may not be null")
    return value
