"""
WordPress taxonomy tables.

These tables belong to WordPress; they are declared here only so brand
lookups can be expressed as SQLAlchemy queries. They live in their own
MetaData so ``Base.metadata.create_all`` never touches them.
"""
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy import BigInteger, Column, Integer, MetaData, String, Table

wp_metadata = MetaData()


@dataclass(frozen=True)
class TermTables:
    term_relationships: Table
    term_taxonomy: Table
    terms: Table


@lru_cache(maxsize=None)
def get_term_tables(prefix: str = "wp_") -> TermTables:
    """Return the term tables for a WordPress install using ``prefix``."""
    term_relationships = Table(
        f"{prefix}term_relationships", wp_metadata,
        Column("object_id", BigInteger, primary_key=True),
        Column("term_taxonomy_id", BigInteger, primary_key=True),
        Column("term_order", Integer, default=0),
    )
    term_taxonomy = Table(
        f"{prefix}term_taxonomy", wp_metadata,
        Column("term_taxonomy_id", BigInteger, primary_key=True),
        Column("term_id", BigInteger, nullable=False),
        Column("taxonomy", String(32), nullable=False),
        Column("description", String, default=""),
        Column("parent", BigInteger, default=0),
        Column("count", BigInteger, default=0),
    )
    terms = Table(
        f"{prefix}terms", wp_metadata,
        Column("term_id", BigInteger, primary_key=True),
        Column("name", String(200), nullable=False),
        Column("slug", String(200), nullable=False),
        Column("term_group", BigInteger, default=0),
    )
    return TermTables(term_relationships, term_taxonomy, terms)
