# app/modules/products/service.py
import logging
from typing import List, Dict, Any
from sqlalchemy.orm import Session

from app.shared import cache as cache_keys
from app.shared.cache import QueryCache
from app.shared.errors import conflict, not_found, storage_guard, validation_error
from app.shared.validators import is_blank
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate, ProductResponse

logger = logging.getLogger(__name__)

# Visões que mostram dados de produtos (vendas trazem o nome do produto)
PRODUCT_DEPENDENT_KEYS = (
    cache_keys.PRODUCTS, cache_keys.SALES, cache_keys.DASHBOARD_STATS, cache_keys.RECENT_ACTIVITY
)

class ProductService:
    """
    Gestão do catálogo: CRUD com preço e estoque não negativos
    """

    def __init__(self, db: Session, cache: QueryCache):
        self.db = db
        self.cache = cache
        self.repository = ProductRepository(db)

    async def list_products(self) -> List[ProductResponse]:
        def load():
            with storage_guard(self.db, "carregar produtos"):
                return [ProductResponse.model_validate(p) for p in self.repository.list_products()]

        return self.cache.get_or_load((cache_keys.PRODUCTS,), load)

    async def create_product(self, product_data: ProductCreate) -> ProductResponse:
        data = product_data.model_dump()

        if is_blank(data["name"]) or data["price"] is None or data["stock_quantity"] is None:
            raise validation_error("Nome, preço e quantidade em estoque são obrigatórios")
        self._validate_fields(data)

        with storage_guard(self.db, "criar produto"):
            product = self.repository.create_product(data)

        logger.info(f"Produto criado: {product.id} ({product.name})")
        self.cache.invalidate(*PRODUCT_DEPENDENT_KEYS)
        return ProductResponse.model_validate(product)

    async def update_product(self, product_id: str, update_data: ProductUpdate) -> ProductResponse:
        data = update_data.model_dump(exclude_unset=True)
        self._validate_fields(data)

        product = self.repository.get_product(product_id)
        if not product:
            raise not_found("Produto não encontrado")

        with storage_guard(self.db, "atualizar produto"):
            product = self.repository.update_product(product, data)

        logger.info(f"Produto atualizado: {product_id} campos={sorted(data)}")
        self.cache.invalidate(*PRODUCT_DEPENDENT_KEYS)
        return ProductResponse.model_validate(product)

    async def delete_product(self, product_id: str) -> None:
        product = self.repository.get_product(product_id)
        if not product:
            raise not_found("Produto não encontrado")

        with storage_guard(self.db, "verificar uso do produto"):
            in_use = self.repository.has_sale_items(product_id)

        if in_use:
            raise conflict("Não é possível excluir produto que já foi utilizado em vendas")

        with storage_guard(self.db, "excluir produto"):
            self.repository.delete_product(product)

        logger.info(f"Produto excluído: {product_id}")
        self.cache.invalidate(*PRODUCT_DEPENDENT_KEYS)

    def _validate_fields(self, data: Dict[str, Any]):
        """Valida apenas os campos presentes"""
        if "name" in data and is_blank(data["name"]):
            raise validation_error("Nome do produto não pode estar vazio")

        if "price" in data:
            if data["price"] is None:
                raise validation_error("Preço é obrigatório")
            if data["price"] < 0:
                raise validation_error("Preço não pode ser negativo")

        if "stock_quantity" in data:
            if data["stock_quantity"] is None:
                raise validation_error("Quantidade em estoque é obrigatória")
            if data["stock_quantity"] < 0:
                raise validation_error("Quantidade em estoque não pode ser negativa")
