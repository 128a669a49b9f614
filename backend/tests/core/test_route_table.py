"""Route Table: ordering, pattern kinds, catch-all placement and freezing.

Invariants tested:
    - First registered match wins; later duplicates are unreachable
    - Method must match exactly, except that GET entries also answer HEAD
    - PREFIX matches the prefix itself and paths below it, never siblings
    - Catch-all never shadows an explicit route, wherever it was registered
    - Mounted groups are entered by prefix; a miss inside continues the outer scan
    - Frozen tables and invalid patterns reject registration
"""

import pytest

from sitedispatch.core.domain_types import Reply
from sitedispatch.core.errors import RouteRegistrationError
from sitedispatch.core.route_table import RouteTable


def _named(name):
    def handler(request):
        return Reply.text(name, 200)
    handler.__name__ = name
    return handler


about = _named("about")
about_again = _named("about_again")
catch_all = _named("catch_all")
api_time = _named("api_time")


def test_exact_match_returns_handler():
    table = RouteTable()
    table.register("GET", "/about", about)
    assert table.match("GET", "/about") is about


def test_unmatched_without_catch_all_is_none():
    table = RouteTable()
    table.register("GET", "/about", about)
    assert table.match("GET", "/missing") is None


def test_first_registered_duplicate_wins():
    table = RouteTable()
    table.register("GET", "/about", about)
    table.register("GET", "/about", about_again)
    assert table.match("GET", "/about") is about


def test_method_must_match_exactly():
    table = RouteTable()
    table.register("GET", "/about", about)
    assert table.match("POST", "/about") is None
    assert table.match("DELETE", "/about") is None


def test_get_route_also_answers_head():
    table = RouteTable()
    table.register("GET", "/about", about)
    assert table.match("HEAD", "/about") is about


def test_head_route_does_not_answer_get():
    table = RouteTable()
    table.register("HEAD", "/about", about)
    assert table.match("GET", "/about") is None


def test_method_is_case_insensitive_at_registration_and_lookup():
    table = RouteTable()
    table.register("get", "/about", about)
    assert table.match("get", "/about") is about


def test_prefix_matches_itself_and_descendants_only():
    table = RouteTable()
    table.register_prefix("GET", "/api", api_time)
    assert table.match("GET", "/api") is api_time
    assert table.match("GET", "/api/time") is api_time
    assert table.match("GET", "/apix") is None


def test_catch_all_registered_first_does_not_shadow_explicit_route():
    table = RouteTable()
    table.register_catch_all(catch_all)
    table.register("GET", "/about", about)
    assert table.match("GET", "/about") is about
    assert table.match("GET", "/elsewhere") is catch_all


def test_catch_all_registered_last_never_beats_earlier_match():
    table = RouteTable()
    table.register("GET", "/about", about)
    table.register_catch_all(catch_all)
    assert table.match("GET", "/about") is about
    assert table.match("DELETE", "/about") is catch_all


def test_mounted_group_matches_under_prefix():
    api = RouteTable()
    api.register("GET", "/time", api_time)
    table = RouteTable()
    table.include("/api", api)
    assert table.match("GET", "/api/time") is api_time
    assert table.match("GET", "/time") is None
    assert table.match("POST", "/api/time") is None


def test_miss_inside_group_continues_outer_scan():
    api = RouteTable()
    api.register("GET", "/time", api_time)
    fallback = _named("api_other")
    table = RouteTable()
    table.include("/api", api)
    table.register("GET", "/api/other", fallback)
    assert table.match("GET", "/api/other") is fallback


def test_include_freezes_group():
    api = RouteTable()
    table = RouteTable()
    table.include("/api", api)
    assert api.frozen
    with pytest.raises(RouteRegistrationError):
        api.register("GET", "/late", about)


def test_frozen_table_rejects_registration():
    table = RouteTable().freeze()
    with pytest.raises(RouteRegistrationError):
        table.register("GET", "/about", about)
    with pytest.raises(RouteRegistrationError):
        table.register_catch_all(catch_all)


@pytest.mark.parametrize("pattern", ["about", "/about/", ""])
def test_invalid_patterns_rejected(pattern):
    with pytest.raises(RouteRegistrationError) as exc_info:
        RouteTable().register("GET", pattern, about)
    assert exc_info.value.code == "ROUTE_REGISTRATION"


def test_empty_method_rejected():
    with pytest.raises(RouteRegistrationError):
        RouteTable().register(" ", "/about", about)


def test_describe_lists_routes_in_lookup_order():
    api = RouteTable()
    api.register("GET", "/time", api_time)
    table = RouteTable()
    table.register_catch_all(catch_all)
    table.register("GET", "/", _named("home"))
    table.include("/api", api)
    table.register_prefix("GET", "/assets", _named("assets"))
    assert table.describe() == [
        ("GET", "/"),
        ("GET", "/api/time"),
        ("GET", "/assets/*"),
        ("*", "*"),
    ]
