# app/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.config.database import init_db
from app.core.middleware import setup_middleware
from app.api.v1.router import api_router
from app.modules.sales.cart import DraftStore
from app.shared.cache import QueryCache

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("=" * 60)
    logger.info(f"{settings.app_name} iniciando")
    logger.info(f"Versão: {settings.version}")
    logger.info(f"Ambiente: {'Desenvolvimento' if settings.debug else 'Produção'}")
    logger.info("=" * 60)
    init_db()

    yield

    # Shutdown
    logger.info(f"{settings.app_name} encerrando")

def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Ponto de venda: catálogo, clientes, vendas, caixa e usuários",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )

    # Estado compartilhado entre requisições
    application.state.query_cache = QueryCache()
    application.state.draft_store = DraftStore()

    setup_middleware(application)
    application.include_router(api_router, prefix="/api/v1")

    @application.get("/")
    async def root():
        return {
            "message": settings.app_name,
            "version": settings.version,
            "status": "running",
            "docs": "/docs" if settings.debug else "Disabled in production",
            "api": "/api/v1"
        }

    return application

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
