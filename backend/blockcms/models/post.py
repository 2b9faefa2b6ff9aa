from blockcms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


post_categories = db.Table(
    "post_categories",
    db.Column(
        "post_id",
        db.String(36),
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True
    ),
    db.Column(
        "category_id",
        db.String(36),
        db.ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True
    ),
)


class Category(BaseModel, TenantMixin):
    __tablename__ = "categories"

    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default="")


class Post(BaseModel, TenantMixin):
    __tablename__ = "posts"

    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    excerpt = db.Column(db.Text, nullable=False, default="")
    content = db.Column(db.Text, nullable=False, default="")  # serialized blocks, by convention
    featured_image = db.Column(db.String(500), nullable=False, default="")
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    author_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    author = db.relationship("User", lazy="joined")
    categories = db.relationship(
        "Category",
        secondary=post_categories,
        lazy="selectin",
        order_by="Category.name"
    )
