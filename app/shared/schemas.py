# app/shared/schemas.py
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal

class ResponseModel(BaseModel):
    """
    Classe base para todos os esquemas de resposta,
    com configuração de Pydantic v2.
    """
    model_config = ConfigDict(
        from_attributes=True,
        json_encoders={
            Decimal: float,
            datetime: lambda v: v.isoformat(),
        }
    )
