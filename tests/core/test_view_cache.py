"""Tests for core/view_cache.py - per-view cached data."""

from core.view_cache import ViewCache, INVOICES_VIEW


class TestViewCache:

    def test_get_missing_returns_none(self, view_cache):
        assert view_cache.get(INVOICES_VIEW) is None

    def test_set_then_get(self, view_cache):
        rows = [{"id": "a", "amount": 5000}]
        view_cache.set(INVOICES_VIEW, rows)

        assert view_cache.get(INVOICES_VIEW) == rows

    def test_set_applies_ttl(self, valkey, redis_connection):
        cache = ViewCache(valkey, ttl_seconds=30)
        cache.set(INVOICES_VIEW, [])

        assert 0 < redis_connection.ttl(f"view:{INVOICES_VIEW}") <= 30

    def test_invalidate_marks_stale(self, view_cache):
        view_cache.set(INVOICES_VIEW, [{"id": "a"}])

        view_cache.invalidate(INVOICES_VIEW)

        assert view_cache.get(INVOICES_VIEW) is None

    def test_invalidate_uncached_view_is_safe(self, view_cache):
        view_cache.invalidate("/never/rendered")
        assert view_cache.get("/never/rendered") is None

    def test_views_are_independent(self, view_cache):
        view_cache.set(INVOICES_VIEW, [1])
        view_cache.set("/dashboard/customers", [2])

        view_cache.invalidate(INVOICES_VIEW)

        assert view_cache.get("/dashboard/customers") == [2]
