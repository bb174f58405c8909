"""Tests for httpie_oapi.cache.store."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from httpie_oapi.cache import EndpointStore
from httpie_oapi.config import AppPaths
from httpie_oapi.exceptions import ConfigError, ConnectionError_, SpecParseError
from httpie_oapi.models import EndpointCollection

SPEC_URL = "https://api.example.com/openapi.json"


def _response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        text=text,
        headers={"content-type": "application/json"},
        request=httpx.Request("GET", SPEC_URL),
    )


@pytest.fixture
def store(tmp_path: Path) -> EndpointStore:
    return EndpointStore(
        AppPaths(
            config_dir=tmp_path / "config",
            cache_dir=tmp_path / "cache",
            data_dir=tmp_path / "data",
        )
    )


class TestLoadEndpoints:
    def test_missing_cache(self, store: EndpointStore) -> None:
        assert store.load_endpoints("petstore") is None

    def test_round_trip(
        self,
        store: EndpointStore,
        petstore_text: str,
        petstore_endpoints: EndpointCollection,
    ) -> None:
        store.save("petstore", petstore_text, petstore_endpoints)
        assert store.load_endpoints("petstore") == petstore_endpoints

    def test_corrupt_cache_is_a_miss(self, store: EndpointStore) -> None:
        path = store.endpoints_path("petstore")
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")
        assert store.load_endpoints("petstore") is None

    def test_wrong_shape_is_a_miss(self, store: EndpointStore) -> None:
        path = store.endpoints_path("petstore")
        path.parent.mkdir(parents=True)
        path.write_text('[{"method": "FETCH", "path": "/x"}]', encoding="utf-8")
        assert store.load_endpoints("petstore") is None


class TestSave:
    def test_writes_both_files(
        self,
        store: EndpointStore,
        petstore_text: str,
        petstore_endpoints: EndpointCollection,
    ) -> None:
        store.save("petstore", petstore_text, petstore_endpoints)
        assert store.raw_spec_path("petstore").read_text(encoding="utf-8") == petstore_text
        assert store.endpoints_path("petstore").is_file()

    def test_unwritable_cache_dir(
        self, tmp_path: Path, petstore_endpoints: EndpointCollection
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        store = EndpointStore(
            AppPaths(config_dir=tmp_path, cache_dir=blocker / "cache", data_dir=tmp_path)
        )
        with pytest.raises(ConfigError):
            store.save("petstore", "{}", petstore_endpoints)


class TestRemove:
    def test_removes_both_files(
        self,
        store: EndpointStore,
        petstore_text: str,
        petstore_endpoints: EndpointCollection,
    ) -> None:
        store.save("petstore", petstore_text, petstore_endpoints)
        store.remove("petstore")
        assert not store.raw_spec_path("petstore").exists()
        assert not store.endpoints_path("petstore").exists()

    def test_missing_files_ignored(self, store: EndpointStore) -> None:
        store.remove("never-saved")


class TestFetchAndResolve:
    def test_fetches_and_extracts(self, store: EndpointStore, petstore_text: str) -> None:
        with patch(
            "httpie_oapi.parser.loader.httpx.get", return_value=_response(petstore_text)
        ):
            raw, endpoints = store.fetch_and_resolve(SPEC_URL)
        assert raw == petstore_text
        assert len(endpoints) == 5

    def test_local_file(self, store: EndpointStore, tmp_path: Path, petstore_text: str) -> None:
        spec_file = tmp_path / "petstore.json"
        spec_file.write_text(petstore_text, encoding="utf-8")
        _, endpoints = store.fetch_and_resolve(str(spec_file))
        assert endpoints.find("/pets") is not None

    def test_swagger_rejected(self, store: EndpointStore) -> None:
        with patch(
            "httpie_oapi.parser.loader.httpx.get",
            return_value=_response('{"swagger": "2.0", "paths": {}}'),
        ):
            with pytest.raises(SpecParseError):
                store.fetch_and_resolve(SPEC_URL)

    def test_network_failure(self, store: EndpointStore) -> None:
        with patch(
            "httpie_oapi.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("refused"),
        ):
            with pytest.raises(ConnectionError_):
                store.fetch_and_resolve(SPEC_URL)
