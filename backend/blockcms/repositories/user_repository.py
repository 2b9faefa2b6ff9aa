from typing import Any, Dict

from blockcms.domain.errors import ConflictError, ValidationError
from blockcms.models.post import Post
from blockcms.models.user import USER_ROLES, User
from blockcms.utils.pagination import ListResult, apply_limit_offset
from blockcms.utils.transaction import transactional
from .base import BaseRepository

EMAIL_CONFLICT = "A user with this email already exists"
HAS_POSTS_CONFLICT = "User still has posts"


def normalize_email(email):
    return (email or "").strip().lower()


class UserRepository(BaseRepository):
    """
    Users live in the store of the tenant they belong to, so no tenant
    column is needed.
    """

    model = User
    not_found_message = "User not found"

    def _query(self, tenant_id=None):
        return self.session.query(User)

    def _assert_email_available(self, email, exclude_id=None):
        query = self._query().filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(EMAIL_CONFLICT)

    def create(self, user: User) -> User:
        user.email = normalize_email(user.email)
        user.role = user.role or "editor"
        if user.role not in USER_ROLES:
            raise ValidationError("Invalid role. Must be 'admin' or 'editor'")

        self._assert_email_available(user.email)
        user.ensure_id()

        with transactional(self.session, EMAIL_CONFLICT):
            self.session.add(user)
        return user

    def get_by_email(self, email) -> User:
        return self._first_or_raise(self._query().filter(User.email == normalize_email(email)))

    def update(self, user: User, changes: Dict[str, Any]) -> User:
        if "email" in changes:
            email = normalize_email(changes["email"])
            if email != user.email:
                self._assert_email_available(email, exclude_id=user.id)
            user.email = email

        if "name" in changes:
            user.name = changes["name"]

        if "role" in changes:
            if changes["role"] not in USER_ROLES:
                raise ValidationError("Invalid role. Must be 'admin' or 'editor'")
            user.role = changes["role"]

        if changes.get("password"):
            user.set_password(changes["password"])

        self._commit(EMAIL_CONFLICT)
        return user

    def delete(self, user_id) -> None:
        user = self.get_by_id(user_id)
        if self.session.query(Post).filter(Post.author_id == user.id).count():
            raise ConflictError(HAS_POSTS_CONFLICT)
        with transactional(self.session, HAS_POSTS_CONFLICT):
            self.session.delete(user)

    def list(self, limit=0, offset=0) -> ListResult:
        query = self._query()
        total = query.count()
        query = query.order_by(User.created_at.desc(), User.id.desc())
        return ListResult(items=apply_limit_offset(query, limit, offset).all(), total=total)
