# app/shared/errors.py
import logging
from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

GENERIC_STORAGE_MESSAGE = "Ocorreu um erro ao acessar o banco de dados."

def validation_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

def not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

def conflict(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)

def access_denied(detail: str = "Acesso negado") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

@contextmanager
def storage_guard(db: Session, action: str):
    """
    Converte falhas do banco em 500 com mensagem genérica.

    ``action`` completa a frase "Ocorreu um erro ao ...", ex.: "criar produto".
    """
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Erro de banco ao {action}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Ocorreu um erro ao {action}."
        )
