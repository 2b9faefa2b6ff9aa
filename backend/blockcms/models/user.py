from werkzeug.security import generate_password_hash, check_password_hash
from blockcms.extensions import db
from .base import BaseModel

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"
USER_ROLES = frozenset({ROLE_ADMIN, ROLE_EDITOR})


class User(BaseModel):
    __tablename__ = "users"

    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(20), nullable=False, default=ROLE_EDITOR)

    def set_password(self, password):
        # Salted KDF; identical passwords produce different hashes
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not password or not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN
