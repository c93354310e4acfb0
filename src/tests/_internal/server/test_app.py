from unittest.mock import patch

import httpx
import pytest
from fastapi import FastAPI

from randstats._internal.core.errors import UnexpectedServerError
from randstats._internal.server.app import make_app
from randstats._internal.server.deps import get_injector_from_app
from randstats._internal.server.services.fetchers.random_org import RandomOrgFetcher
from randstats._internal.server.testing.common import ScriptedFetcher
from randstats.version import __version__


class TestMakeApp:
    @pytest.mark.asyncio
    async def test_get_info(self):
        app = make_app(fetcher=ScriptedFetcher())
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test-host"
        ) as client:
            resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.json() == {"version": __version__}

    def test_uses_random_org_by_default(self):
        app = make_app()
        assert isinstance(get_injector_from_app(app).get_fetcher(), RandomOrgFetcher)

    @pytest.mark.asyncio
    async def test_lifespan_closes_fetcher(self):
        fetcher = ScriptedFetcher()
        app = make_app(fetcher=fetcher)
        with patch("randstats._internal.server.app.configure_logging") as configure_logging:
            async with app.router.lifespan_context(app):
                assert not fetcher.closed
        configure_logging.assert_called_once()
        assert fetcher.closed

    def test_missing_injector(self):
        with pytest.raises(UnexpectedServerError):
            get_injector_from_app(FastAPI())
