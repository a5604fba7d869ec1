"""
Brand repository.

Reads product brands straight from the WordPress term tables.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.constants.woocommerce import WPTaxonomy
from app.core.config import settings
from app.models.wordpress import get_term_tables


class BrandRepository:
    """Repository for brand taxonomy lookups."""

    def __init__(self, db: Session, table_prefix: Optional[str] = None):
        """
        Initialize repository with database session.

        Args:
            db: SQLAlchemy session bound to the WordPress database
            table_prefix: WordPress table prefix (defaults to settings)
        """
        self.db = db
        self.tables = get_term_tables(table_prefix or settings.wp_table_prefix)

    def get_first_brand_name(self, entity_id: int) -> Optional[str]:
        """
        Get the name of the first ``product_brand`` term attached to an entity.

        Args:
            entity_id: WooCommerce product ID

        Returns:
            Brand name or None if the entity has no brand
        """
        rel = self.tables.term_relationships
        tax = self.tables.term_taxonomy
        term = self.tables.terms

        stmt = (
            select(term.c.name)
            .select_from(
                rel.outerjoin(tax, rel.c.term_taxonomy_id == tax.c.term_taxonomy_id)
                .outerjoin(term, term.c.term_id == tax.c.term_id)
            )
            .where(rel.c.object_id == int(entity_id), tax.c.taxonomy == WPTaxonomy.PRODUCT_BRAND)
            .limit(1)
        )
        row = self.db.execute(stmt).first()

        if row is None:
            return None
        return row.name
