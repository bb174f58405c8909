"""Tests for httpie_oapi.completion.engine."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from httpie_oapi.completion import BashFormatter, CompletionEngine, complete
from httpie_oapi.config import AppPaths
from httpie_oapi.models import Endpoint, EndpointCollection, HTTPMethod, Param, ParamSource
from httpie_oapi.registry import ApiRegistry
from httpie_oapi.tokens import tokenize

BASE_URL = "https://api.example.com"


def _run(registry: ApiRegistry, line: str, cursor: int | None = None) -> list[str]:
    engine = CompletionEngine(registry.store)
    cursor = len(line) if cursor is None else cursor
    return engine.complete(tokenize(line, cursor), registry.list_apis())


@pytest.fixture
def small_registry(app_paths: AppPaths) -> ApiRegistry:
    """One API with ``GET /pets`` and ``GET /pets/{id}`` and a warm cache."""
    registry = ApiRegistry(app_paths)
    registry.add("petstore", f"{BASE_URL}/openapi.json", BASE_URL)
    registry.save()
    endpoints = EndpointCollection(
        [
            Endpoint(method=HTTPMethod.GET, path="/pets"),
            Endpoint(
                method=HTTPMethod.GET,
                path="/pets/{id}",
                params=[Param(name="id", required=True, source=ParamSource.PATH)],
            ),
        ]
    )
    registry.store.save("petstore", "{}", endpoints)
    return ApiRegistry.load(app_paths)


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_base_url_under_cursor_lists_paths(self, small_registry: ApiRegistry) -> None:
        assert _run(small_registry, f"http {BASE_URL}") == [
            f"{BASE_URL}/pets\t/pets",
            f"{BASE_URL}/pets/{{id}}\t/pets/{{id}}",
        ]

    def test_past_path_offers_path_param(self, small_registry: ApiRegistry) -> None:
        assert _run(small_registry, f"http {BASE_URL}/pets/{{id}} ") == [":id=\tid"]

    def test_typed_param_is_omitted(self, small_registry: ApiRegistry) -> None:
        assert _run(small_registry, f"http {BASE_URL}/pets/{{id}} id=1 ") == []

    def test_prefixed_path_value_does_not_hide_param(self, small_registry: ApiRegistry) -> None:
        # Only a token starting with the bare name counts as already typed.
        assert _run(small_registry, f"http {BASE_URL}/pets/{{id}} :id=5 ") == [":id=\tid"]

    def test_empty_registry_outputs_nothing(self, app_paths: AppPaths) -> None:
        registry = ApiRegistry.load(app_paths)
        assert _run(registry, "http ") == []
        assert _run(registry, f"http {BASE_URL}/pets ") == []
        assert _run(registry, "") == []


# ---------------------------------------------------------------------------
# Rule selection against the petstore fixture
# ---------------------------------------------------------------------------


class TestRules:
    def test_no_api_on_line_lists_apis(self, petstore_registry: ApiRegistry) -> None:
        assert _run(petstore_registry, "http ") == [f"{BASE_URL}/\tpetstore"]

    def test_unrelated_url_lists_apis(self, petstore_registry: ApiRegistry) -> None:
        assert _run(petstore_registry, "http https://other.example.org/x") == [
            f"{BASE_URL}/\tpetstore"
        ]

    def test_endpoint_lines_use_summary_or_path(self, petstore_registry: ApiRegistry) -> None:
        lines = _run(petstore_registry, f"http {BASE_URL}/pe")
        assert lines == [
            f"{BASE_URL}/pets\tList all pets",
            f"{BASE_URL}/pets\tCreate a pet",
            f"{BASE_URL}/pets/{{petId}}\tInfo for a specific pet",
            f"{BASE_URL}/pets/{{petId}}\tDelete a pet",
            f"{BASE_URL}/store/inventory\t/store/inventory",
        ]

    def test_params_for_all_substring_matches(self, petstore_registry: ApiRegistry) -> None:
        lines = _run(petstore_registry, f"http POST {BASE_URL}/pets ")
        # /pets (GET, POST) and /pets/{petId} (GET, DELETE) all contain "/pets".
        assert lines == [
            "X-Request-Id:\t[Correlation id]",
            "limit==\t[How many items to return]",
            "name=\tPet name",
            "X-Request-Id:\t[Correlation id]",
            "id=\t[Unique id]",
            "tag=\t[tag]",
            ":petId=\tThe id of the pet",
            ":petId=\tThe id of the pet",
        ]

    def test_longer_fragment_narrows_endpoints(self, petstore_registry: ApiRegistry) -> None:
        lines = _run(petstore_registry, f"http POST {BASE_URL}/pets/{{petId}} ")
        assert lines == [":petId=\tThe id of the pet", ":petId=\tThe id of the pet"]

    def test_typed_params_filtered(self, petstore_registry: ApiRegistry) -> None:
        lines = _run(petstore_registry, f"http {BASE_URL}/store/inventory ")
        assert lines == []
        lines = _run(petstore_registry, f"http GET {BASE_URL}/pets limit==5 X-Request-Id:abc ")
        assert "limit==\t[How many items to return]" not in lines
        assert not any(line.startswith("X-Request-Id") for line in lines)
        assert "name=\tPet name" in lines

    def test_cursor_inside_earlier_url_token(self, petstore_registry: ApiRegistry) -> None:
        line = f"http {BASE_URL}/store limit==1"
        # Cursor at the end of the URL token, not at the end of the line.
        assert _run(petstore_registry, line, cursor=len(f"http {BASE_URL}/store")) == [
            f"{BASE_URL}/pets\tList all pets",
            f"{BASE_URL}/pets\tCreate a pet",
            f"{BASE_URL}/pets/{{petId}}\tInfo for a specific pet",
            f"{BASE_URL}/pets/{{petId}}\tDelete a pet",
            f"{BASE_URL}/store/inventory\t/store/inventory",
        ]

    def test_no_matching_path_gives_nothing(self, petstore_registry: ApiRegistry) -> None:
        assert _run(petstore_registry, f"http {BASE_URL}/nothing-here ") == []


class TestApiSelection:
    def test_first_api_by_name_wins(self, app_paths: AppPaths) -> None:
        registry = ApiRegistry(app_paths)
        registry.add("b-api", "spec-b", "https://x.example.com")
        registry.add("a-api", "spec-a", "https://x.example.com/v1")
        registry.store.save(
            "a-api", "{}", EndpointCollection([Endpoint(method=HTTPMethod.GET, path="/from-a")])
        )
        registry.store.save(
            "b-api", "{}", EndpointCollection([Endpoint(method=HTTPMethod.GET, path="/from-b")])
        )
        lines = _run(registry, "http https://x.example.com/v1")
        assert lines == ["https://x.example.com/v1/from-a\t/from-a"]

    def test_lists_all_apis_in_name_order(self, app_paths: AppPaths) -> None:
        registry = ApiRegistry(app_paths)
        registry.add("zeta", "s", "https://zeta.example.com")
        registry.add("alpha", "s", "https://alpha.example.com")
        assert _run(registry, "http ") == [
            "https://alpha.example.com/\talpha",
            "https://zeta.example.com/\tzeta",
        ]

    def test_no_fetch_when_no_api_matches(self, app_paths: AppPaths) -> None:
        registry = ApiRegistry(app_paths)
        registry.add("petstore", f"{BASE_URL}/openapi.json", BASE_URL)
        with patch("httpie_oapi.parser.loader.httpx.get") as mock_get:
            _run(registry, "http ")
        mock_get.assert_not_called()


class TestFormatterSelection:
    def test_bash_formatter_drops_descriptions(self, petstore_registry: ApiRegistry) -> None:
        line = f"http {BASE_URL}/pets/{{petId}} "
        lines = complete(
            tokenize(line, len(line)),
            petstore_registry.list_apis(),
            petstore_registry.store,
            BashFormatter(),
        )
        assert lines == [":petId=", ":petId="]
