"""Agency persistence and assembly of the full agency/account graph."""

from segabank.exceptions import EntityNotFoundError
from segabank.logging import get_logger, log_context
from segabank.models import Account, Agency
from segabank.store.account import AccountStore
from segabank.store.base import BaseStore
from segabank.store.connection import ConnectionProvider
from segabank.store.mapper import agency_to_row, to_agency

logger = get_logger(__name__)

INSERT = "INSERT INTO agence (code, adresse) VALUES (%(code)s, %(adresse)s) RETURNING id"
UPDATE = "UPDATE agence SET code = %(code)s, adresse = %(adresse)s WHERE id = %(id)s"
DELETE = "DELETE FROM agence WHERE id = %s"
QUERY_ALL = "SELECT id, code, adresse FROM agence ORDER BY id"
QUERY_ID = "SELECT id, code, adresse FROM agence WHERE id = %s"


class AgencyStore(BaseStore):
    """CRUD over ``agence``; ``build_full`` returns agencies with related accounts."""

    table = "agence"

    def __init__(
        self,
        provider: ConnectionProvider,
        account_store: AccountStore | None = None,
    ) -> None:
        super().__init__(provider)
        self.account_store = account_store or AccountStore(provider)

    def create(self, agency: Agency) -> None:
        self._require_new(agency.agency_id, "Agency")
        with self._cursor() as cur:
            cur.execute(INSERT, agency_to_row(agency))
            agency.agency_id = cur.fetchone()["id"]
        logger.debug("Created agency %s", agency.code, extra=log_context(self.table, agency.agency_id))

    def update(self, agency: Agency) -> None:
        agency_id = self._require_id(agency.agency_id, "Agency")
        with self._cursor() as cur:
            cur.execute(UPDATE, {**agency_to_row(agency), "id": agency_id})
            if cur.rowcount == 0:
                raise EntityNotFoundError(f"Agency {agency_id} not found")

    def delete(self, agency: Agency) -> None:
        agency_id = self._require_id(agency.agency_id, "Agency")
        with self._cursor() as cur:
            cur.execute(DELETE, (agency_id,))

    def find_by_id(self, agency_id: int) -> Agency | None:
        with self._cursor() as cur:
            cur.execute(QUERY_ID, (agency_id,))
            row = cur.fetchone()
        return to_agency(row) if row is not None else None

    def find_all(self) -> list[Agency]:
        with self._cursor() as cur:
            cur.execute(QUERY_ALL)
            rows = cur.fetchall()
        return [to_agency(row) for row in rows]

    def build_full(self) -> list[Agency]:
        """Load agencies and attach fully related accounts to them."""
        agencies = self.find_all()
        accounts = self.account_store.build_full()
        self.fill_relations(agencies, accounts)
        logger.info("Loaded %d agencies", len(agencies), extra=log_context(self.table, count=len(agencies)))
        return agencies

    @staticmethod
    def fill_relations(agencies: list[Agency], accounts: list[Account]) -> None:
        for agency in agencies:
            for account in accounts:
                if account.agency_id == agency.agency_id:
                    agency.accounts.append(account)
