from blockcms.domain.errors import NotFoundError
from blockcms.storage.scope import RequestScope
from blockcms.utils.transaction import transactional


class BaseRepository:
    """Repositories operate on the storage handle of one request scope."""

    model = None
    not_found_message = "Resource not found"

    def __init__(self, scope: RequestScope):
        self.scope = scope
        self.session = scope.session
        self.tenant_id = scope.tenant_id

    def _query(self, tenant_id=None):
        tenant = self.tenant_id if tenant_id is None else tenant_id
        return self.session.query(self.model).filter(self.model.tenant_id == tenant)

    def _first_or_raise(self, query):
        entity = query.first()
        if entity is None:
            raise NotFoundError(self.not_found_message)
        return entity

    def get_by_id(self, entity_id):
        if not entity_id:
            raise NotFoundError(self.not_found_message)
        return self._first_or_raise(self._query().filter(self.model.id == str(entity_id)))

    def count(self):
        return self._query().count()

    def _commit(self, conflict_message="Resource already exists"):
        with transactional(self.session, conflict_message):
            self.session.flush()
