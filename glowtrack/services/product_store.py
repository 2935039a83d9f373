from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session
from typing import Optional, List, Dict, Any
import logging

from glowtrack.middleware.transaction_handler import transactional
from glowtrack.models.product import Product, ProductCategory
from glowtrack.utils.date_helpers import to_utc_naive
from glowtrack.utils.exceptions import ProductNotFoundError, ProductAlreadyExistsError
from glowtrack.utils.validators import escape_like

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "category", "pao_months", "expiry_date")
REQUIRED_FIELDS = ("name", "category")


class ProductStore:
    """
    Catalogue des produits suivis

    Ordre de liste : le plus récemment ajouté en premier (date_added desc).
    id et date_added ne changent jamais après la création.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        search: Optional[str] = None,
        category: Optional[ProductCategory] = None,
    ) -> List[Product]:
        query = self.db.query(Product)

        if search:
            query = query.filter(self._name_matches(search))

        if category:
            query = query.filter(Product.category == ProductCategory(category))

        return query.order_by(Product.date_added.desc(), Product.id).all()

    def get(self, product_id: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    @transactional
    def add(self, product: Product) -> Product:
        if product.id and self.get(product.id):
            raise ProductAlreadyExistsError(product.id)

        return self._insert(product)

    @transactional
    def update(self, product_id: str, **changes: Any) -> Product:
        product = self.get(product_id)
        if not product:
            raise ProductNotFoundError(product_id)

        self._apply(product, changes)
        self.db.flush()

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return product

    @transactional
    def save(self, product: Product) -> Product:
        """Upsert : mise à jour si l'id existe, insertion sinon"""
        existing = self.get(product.id) if product.id else None

        if not existing:
            return self._insert(product)

        self._apply(
            existing, {field: getattr(product, field) for field in UPDATABLE_FIELDS}
        )
        self.db.flush()

        logger.info(f"Saved product {existing.id} (update)")
        return existing

    @transactional
    def delete(self, product_id: str) -> bool:
        product = self.get(product_id)
        if not product:
            logger.debug(f"Delete ignored, product {product_id} does not exist")
            return False

        self.db.delete(product)
        logger.info(f"Deleted product {product_id}")
        return True

    def _insert(self, product: Product) -> Product:
        product.date_added = to_utc_naive(product.date_added)
        product.expiry_date = to_utc_naive(product.expiry_date)

        self.db.add(product)
        self.db.flush()

        logger.info(f"Added product {product.id} ({product.display_name})")
        return product

    def _apply(self, product: Product, changes: Dict[str, Any]):
        for key, value in changes.items():
            if key not in UPDATABLE_FIELDS:
                logger.debug(f"Ignoring immutable or unknown field '{key}'")
                continue

            if value is None and key in REQUIRED_FIELDS:
                logger.debug(f"Ignoring null value for required field '{key}'")
                continue

            if key == "expiry_date":
                value = to_utc_naive(value)
            elif key == "category":
                value = ProductCategory(value)

            setattr(product, key, value)

    @staticmethod
    def _name_matches(search: str):
        """
        Sous-chaîne du nom, insensible à la casse et sans joker LIKE

        Un produit sans nom est affiché "<Catégorie> Item" : la recherche
        porte aussi sur ce libellé de repli.
        """
        pattern = f"%{escape_like(search)}%"
        needle = search.casefold()

        fallback_categories = [
            category
            for category in ProductCategory
            if needle in f"{category.label} Item".casefold()
        ]

        condition = Product.name.ilike(pattern, escape="\\")
        if fallback_categories:
            condition = or_(
                condition,
                and_(
                    func.trim(Product.name) == "",
                    Product.category.in_(fallback_categories),
                ),
            )
        return condition
