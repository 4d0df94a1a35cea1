from typing import Annotated

from pydantic import BaseModel, StringConstraints
from pydantic.alias_generators import to_camel

# Texto obligatorio: se recorta antes de validar, "   " cuenta como vacío
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class CamelModel(BaseModel):
    """Base de todos los schemas: snake_case en Python, camelCase en el JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
