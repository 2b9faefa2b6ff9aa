import pytest

from blockcms.domain.blocks import Block
from blockcms.domain.errors import ConflictError, NotFoundError, ValidationError
from blockcms.models.page import Page
from blockcms.repositories.page_repository import ListPageOptions, PageRepository


def make_page(repo, slug, title=None, status="draft", blocks=None):
    page = Page(slug=slug, title=title or slug.title(), status=status)
    page.blocks = blocks or []
    return repo.create(page)


def test_create_assigns_id_and_defaults(scope):
    repo = PageRepository(scope)
    page = make_page(repo, "about")

    assert page.id
    assert page.tenant_id == ""
    assert page.status == "draft"
    assert page.published_at is None
    assert page.blocks == []


def test_create_keeps_caller_supplied_id(scope):
    page = Page(id="fixed-id", slug="fixed", title="Fixed")
    PageRepository(scope).create(page)
    assert PageRepository(scope).get_by_id("fixed-id").slug == "fixed"


def test_create_with_existing_id_conflicts(scope):
    repo = PageRepository(scope)
    repo.create(Page(id="taken-id", slug="first", title="First"))

    with pytest.raises(ConflictError, match="id already exists"):
        repo.create(Page(id="taken-id", slug="second", title="Second"))

    # Soft-deleted pages keep their id
    repo.delete("taken-id")
    with pytest.raises(ConflictError):
        repo.create(Page(id="taken-id", slug="third", title="Third"))

    with pytest.raises(NotFoundError):
        repo.get_by_slug("second")


@pytest.mark.parametrize("field", ["slug", "title"])
def test_create_rejects_empty_required_fields(scope, field):
    repo = PageRepository(scope)
    values = {"slug": "x", "title": "X", field: ""}

    with pytest.raises(ValidationError):
        repo.create(Page(**values))

    assert repo.list().total == 0


def test_create_with_published_status_stamps_published_at(scope):
    page = make_page(PageRepository(scope), "live", status="published")
    assert page.published_at is not None


def test_duplicate_slug_conflicts(scope):
    repo = PageRepository(scope)
    make_page(repo, "home")

    with pytest.raises(ConflictError):
        make_page(repo, "home")


def test_slug_of_deleted_page_can_be_reused(scope):
    repo = PageRepository(scope)
    first = make_page(repo, "home")
    repo.delete(first.id)

    second = make_page(repo, "home")
    assert second.id != first.id


def test_delete_is_soft_and_hides_the_page(scope):
    repo = PageRepository(scope)
    page = make_page(repo, "gone")

    repo.delete(page.id)

    with pytest.raises(NotFoundError):
        repo.get_by_id(page.id)
    with pytest.raises(NotFoundError):
        repo.get_by_slug("gone")
    assert scope.session.get(Page, page.id).deleted_at is not None


def test_get_by_slug_published_only(scope):
    repo = PageRepository(scope)
    make_page(repo, "draft-page")

    assert repo.get_by_slug("draft-page").slug == "draft-page"
    with pytest.raises(NotFoundError):
        repo.get_by_slug("draft-page", published_only=True)


def test_publish_and_unpublish_keep_published_at_in_sync(scope):
    repo = PageRepository(scope)
    page = make_page(repo, "news")

    published = repo.publish(page.id)
    assert published.status == "published"
    assert published.published_at is not None

    first_stamp = published.published_at
    assert repo.publish(page.id).published_at == first_stamp

    unpublished = repo.unpublish(page.id)
    assert unpublished.status == "draft"
    assert unpublished.published_at is None


def test_update_status_derives_published_at(scope):
    repo = PageRepository(scope)
    page = make_page(repo, "status")

    repo.update(page, {"status": "published"})
    assert page.published_at is not None

    repo.update(page, {"status": "archived"})
    assert page.published_at is None


def test_update_rejects_invalid_status_and_keeps_state(scope):
    repo = PageRepository(scope)
    page = make_page(repo, "strict")

    with pytest.raises(ValidationError):
        repo.update(page, {"status": "invalid"})

    assert repo.get_by_id(page.id).status == "draft"


@pytest.mark.parametrize("changes", [
    {"title": "Changed", "status": "invalid"},
    {"slug": "changed", "title": ""},
])
def test_failed_update_does_not_leak_into_later_commits(scope, changes):
    repo = PageRepository(scope)
    page = make_page(repo, "steady", title="Steady")

    with pytest.raises(ValidationError):
        repo.update(page, changes)

    # An unrelated write commits whatever is still pending on the session
    make_page(repo, "unrelated")
    scope.session.expire_all()

    stored = repo.get_by_id(page.id)
    assert stored.title == "Steady"
    assert stored.slug == "steady"


def test_update_slug_collision_conflicts(scope):
    repo = PageRepository(scope)
    make_page(repo, "taken")
    page = make_page(repo, "mine")

    with pytest.raises(ConflictError):
        repo.update(page, {"slug": "taken"})

    # Own slug is not a collision
    assert repo.update(page, {"slug": "mine", "title": "Mine 2"}) == ["title"]


def test_update_blocks_absent_leaves_them_and_empty_clears(scope):
    repo = PageRepository(scope)
    page = make_page(repo, "blocks", blocks=[Block(id="b1", type="text", data={"content": "x"})])

    repo.update(page, {"title": "Renamed"})
    assert [b.id for b in repo.get_by_id(page.id).blocks] == ["b1"]

    repo.update(page, {"blocks": []})
    assert repo.get_by_id(page.id).blocks == []


def test_update_meta_replaces_and_clears(scope):
    repo = PageRepository(scope)
    page = make_page(repo, "meta")

    repo.update(page, {"meta": {"description": "SEO"}})
    assert repo.get_by_id(page.id).meta == {"description": "SEO"}

    repo.update(page, {"meta": {}})
    assert not repo.get_by_id(page.id).meta


def test_list_filters_by_status_and_counts_before_pagination(scope):
    repo = PageRepository(scope)
    for slug in ("a", "b", "c"):
        make_page(repo, slug, status="published")
    make_page(repo, "d")

    result = repo.list(ListPageOptions(status="published", limit=2))
    assert len(result.items) == 2
    assert result.total == 3
    assert all(p.status == "published" for p in result.items)

    everything = repo.list(ListPageOptions(status="published", limit=0))
    assert len(everything.items) == everything.total == 3


def test_list_offset(scope):
    repo = PageRepository(scope)
    for slug in ("one", "two", "three"):
        make_page(repo, slug)

    result = repo.list(ListPageOptions(limit=10, offset=2))
    assert len(result.items) == 1
    assert result.total == 3


def test_list_search_is_case_insensitive_over_title_and_slug(scope):
    repo = PageRepository(scope)
    make_page(repo, "pricing", title="Our Plans")
    make_page(repo, "contact", title="Get In Touch")
    make_page(repo, "team", title="About us")

    assert {p.slug for p in repo.list(ListPageOptions(search="PRIC")).items} == {"pricing"}
    assert {p.slug for p in repo.list(ListPageOptions(search="touch")).items} == {"contact"}
    assert repo.list(ListPageOptions(search="%")).total == 0


def test_list_orders_by_most_recent_update(scope):
    repo = PageRepository(scope)
    first = make_page(repo, "first")
    make_page(repo, "second")

    repo.update(first, {"title": "First again"})

    assert repo.list().items[0].id == first.id


def test_list_excludes_deleted_pages(scope):
    repo = PageRepository(scope)
    keep = make_page(repo, "keep")
    drop = make_page(repo, "drop")
    repo.delete(drop.id)

    result = repo.list()
    assert [p.id for p in result.items] == [keep.id]
    assert result.total == 1


def test_list_is_scoped_to_tenant(scope):
    repo = PageRepository(scope)
    make_page(repo, "local")

    assert repo.list(ListPageOptions(tenant_id="someone-else")).total == 0
