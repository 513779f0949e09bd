from pydantic import BaseModel, ConfigDict


class ApiBaseModel(BaseModel):
    """
    Clase base para los esquemas de respuesta,
    con configuración de Pydantic v2.
    """
    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


def empty_to_none(value):
    """Los formularios envían "" para campos opcionales vacíos"""
    if isinstance(value, str) and not value.strip():
        return None
    return value
