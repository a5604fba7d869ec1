from sqlalchemy import insert

from app.models.wordpress import get_term_tables, wp_metadata
from app.repositories import BrandRepository


def test_returns_first_brand_name(brands, add_brand):
    add_brand(10, "Acme")

    assert brands.get_first_brand_name(10) == "Acme"


def test_ignores_other_taxonomies(brands, add_brand):
    add_brand(10, "Outdoor", taxonomy="product_cat")
    add_brand(10, "Acme")

    assert brands.get_first_brand_name(10) == "Acme"


def test_entity_without_brand_returns_none(brands, add_brand):
    add_brand(11, "Acme")

    assert brands.get_first_brand_name(10) is None


def test_custom_table_prefix(db, engine):
    tables = get_term_tables("shop_")
    wp_metadata.create_all(bind=engine)
    db.execute(insert(tables.terms).values(term_id=1, name="Nordic", slug="nordic"))
    db.execute(insert(tables.term_taxonomy).values(
        term_taxonomy_id=1, term_id=1, taxonomy="product_brand"
    ))
    db.execute(insert(tables.term_relationships).values(object_id=5, term_taxonomy_id=1))
    db.commit()

    repo = BrandRepository(db, table_prefix="shop_")

    assert repo.get_first_brand_name(5) == "Nordic"
    assert repo.get_first_brand_name("5") == "Nordic"
