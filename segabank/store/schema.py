"""DDL for the back-office tables."""

from segabank.logging import get_logger, log_context
from segabank.store.base import BaseStore

logger = get_logger(__name__)

DDL = """
CREATE TABLE IF NOT EXISTS agence (
    id SERIAL PRIMARY KEY,
    code VARCHAR(20) NOT NULL,
    adresse VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS compte (
    id SERIAL PRIMARY KEY,
    idagence INTEGER NOT NULL REFERENCES agence (id),
    type VARCHAR(10) NOT NULL CHECK (type IN ('simple', 'epargne', 'payant')),
    solde DOUBLE PRECISION NOT NULL DEFAULT 0,
    decouvert DOUBLE PRECISION,
    tauxinteret DOUBLE PRECISION,
    datecreation TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS operation (
    id SERIAL PRIMARY KEY,
    idcompte INTEGER NOT NULL REFERENCES compte (id),
    type VARCHAR(10) NOT NULL CHECK (type IN ('depot', 'retrait')),
    montant DOUBLE PRECISION NOT NULL,
    dateoperation TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


class SchemaManager(BaseStore):
    """Creates the tables when they do not exist yet."""

    table = "schema"

    def create_tables(self) -> None:
        with self._cursor() as cur:
            cur.execute(DDL)
        logger.info("Tables agence, compte, operation are ready", extra=log_context(self.table))
