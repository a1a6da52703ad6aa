"""Tests for source resolution and dispatch."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from svgprovider.errors.exceptions import SourceUnavailableError
from svgprovider.key import derive_key
from svgprovider.sources.resolver import SourceResolver
from svgprovider.types import SvgRequest, SvgSource


@pytest.fixture
def collaborators():
    asset_bundle = MagicMock()
    asset_bundle.load_string = AsyncMock(return_value="<svg id='asset'/>")
    file_reader = MagicMock()
    file_reader.read_text = AsyncMock(return_value="<svg id='file'/>")
    http_client = MagicMock()
    http_client.get_text = AsyncMock(return_value="<svg id='net'/>")
    http_client.close = AsyncMock()
    return asset_bundle, file_reader, http_client


@pytest.fixture
def resolver(collaborators):
    asset_bundle, file_reader, http_client = collaborators
    return SourceResolver(
        asset_bundle=asset_bundle, file_reader=file_reader, http_client=http_client
    )


def _key(path="icon.svg", source=SvgSource.ASSET, **kwargs):
    return derive_key(SvgRequest(path=path, source=source, **kwargs))


def _assert_no_io(collaborators):
    asset_bundle, file_reader, http_client = collaborators
    asset_bundle.load_string.assert_not_awaited()
    file_reader.read_text.assert_not_awaited()
    http_client.get_text.assert_not_awaited()


class TestDispatch:
    async def test_raw_performs_no_io(self, resolver, collaborators):
        markup = "<svg xmlns='http://www.w3.org/2000/svg'></svg>"
        assert await resolver.resolve(_key(markup, SvgSource.RAW)) == markup
        _assert_no_io(collaborators)

    async def test_asset(self, resolver, collaborators):
        assert await resolver.resolve(_key("icons/a.svg")) == "<svg id='asset'/>"
        collaborators[0].load_string.assert_awaited_once_with("icons/a.svg")

    async def test_file(self, resolver, collaborators):
        assert await resolver.resolve(_key("/tmp/a.svg", SvgSource.FILE)) == "<svg id='file'/>"
        collaborators[1].read_text.assert_awaited_once_with("/tmp/a.svg")

    async def test_network_passes_headers(self, resolver, collaborators):
        key = _key("https://example.com/a.svg", SvgSource.NETWORK, headers={"X-Token": "t"})
        assert await resolver.resolve(key) == "<svg id='net'/>"
        collaborators[2].get_text.assert_awaited_once_with(
            "https://example.com/a.svg", {"X-Token": "t"}
        )

    async def test_source_errors_propagate(self, resolver, collaborators):
        collaborators[0].load_string.side_effect = SourceUnavailableError(
            "missing", error_type="not_found"
        )
        with pytest.raises(SourceUnavailableError):
            await resolver.resolve(_key())

    async def test_close_closes_http_client(self, resolver, collaborators):
        await resolver.close()
        collaborators[2].close.assert_awaited_once()


class TestCustomGetter:
    async def test_getter_preempts_network(self, resolver, collaborators):
        calls = []

        def getter(key):
            calls.append(key)
            return "<svg id='custom'/>"

        key = _key("https://example.com/a.svg", SvgSource.NETWORK, svg_getter=getter)
        assert await resolver.resolve(key) == "<svg id='custom'/>"
        assert calls == [key]
        _assert_no_io(collaborators)

    async def test_async_getter(self, resolver, collaborators):
        async def getter(key):
            return "<svg id='async'/>"

        assert await resolver.resolve(_key(svg_getter=getter)) == "<svg id='async'/>"
        _assert_no_io(collaborators)

    async def test_none_falls_through_to_source(self, resolver, collaborators):
        key = _key(svg_getter=lambda key: None)
        assert await resolver.resolve(key) == "<svg id='asset'/>"
        collaborators[0].load_string.assert_awaited_once()

    async def test_non_string_result_is_source_failure(self, resolver):
        key = _key(svg_getter=lambda key: b"<svg/>")
        with pytest.raises(SourceUnavailableError) as exc_info:
            await resolver.resolve(key)
        assert exc_info.value.error_type == "bad_fetcher_result"

    async def test_getter_exception_propagates(self, resolver):
        def getter(key):
            raise ConnectionError("offline")

        with pytest.raises(ConnectionError):
            await resolver.resolve(_key(svg_getter=getter))


class TestLazyCollaborators:
    async def test_raw_only_resolver_needs_no_collaborators(self):
        resolver = SourceResolver()
        assert await resolver.resolve(_key("<svg/>", SvgSource.RAW)) == "<svg/>"
        await resolver.close()

    async def test_default_file_reader(self, tmp_path):
        path = tmp_path / "a.svg"
        path.write_text("<svg/>")
        resolver = SourceResolver()
        assert await resolver.resolve(_key(str(path), SvgSource.FILE)) == "<svg/>"
