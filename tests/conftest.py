from __future__ import annotations

import pytest


@pytest.fixture()
def location(monkeypatch):
    from url_tools.constants import LOCATION_ENV

    location = "http://example.com/a/b"
    monkeypatch.setenv(LOCATION_ENV, location)
    return location


@pytest.fixture()
def no_location(monkeypatch):
    from url_tools.constants import LOCATION_ENV

    monkeypatch.delenv(LOCATION_ENV, raising=False)


@pytest.fixture(scope="session")
def url_cls():
    from url_tools import URL

    class PageURL(URL):
        location_provider = staticmethod(lambda: "https://example.com/dir/page")

    return PageURL


@pytest.fixture(scope="session")
def parse():
    from url_tools import URL

    def parse(url):
        return URL(url, resolve_location=False)

    return parse
