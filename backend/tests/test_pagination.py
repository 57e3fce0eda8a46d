from briefdesk.core.config import settings
from briefdesk.schemas.catalog import IndustryIn
from briefdesk.services import catalog
from briefdesk.services.pagination import Page, clamp_page_size


def test_clamp_page_size():
    assert clamp_page_size(None) == settings.default_page_size
    assert clamp_page_size(0) == settings.default_page_size
    assert clamp_page_size(10) == 10
    assert clamp_page_size(10_000) == settings.max_page_size


def test_page_math():
    page = Page(items=[], total=15, page=1, page_size=10)
    assert page.pages == 2
    assert page.has_next
    assert not Page(items=[], total=0, page=1, page_size=10).has_next


def test_listing_hides_soft_deleted_and_searches(db, actor):
    retail = catalog.create_entry(db, catalog.industries, IndustryIn(name="Retail"), actor_id=actor.id)
    catalog.create_entry(db, catalog.industries, IndustryIn(name="Real Estate"), actor_id=actor.id)
    catalog.create_entry(db, catalog.industries, IndustryIn(name="Banking"), actor_id=actor.id)
    catalog.industries.soft_delete(db, retail, actor_id=actor.id)

    assert catalog.industries.list_page(db).total == 2
    assert catalog.industries.list_page(db, include_deleted=True).total == 3
    found = catalog.industries.list_page(db, search="real")
    assert [i.name for i in found.items] == ["Real Estate"]
