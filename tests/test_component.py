"""Tests for perch.vue.component — full page rendering."""

import html
import json
import re
from pathlib import Path

import pytest

from perch.config import VueConfig
from perch.errors import ComponentNotFoundError, ConfigurationError, MalformedTemplateError
from perch.http.headers import Headers
from perch.http.query import QueryParams
from perch.http.request import Request
from perch.vue.component import VueComponent, component_id, route_tag
from perch.vue.runtime import VueRuntime


def _request(
    *,
    host: str = "example.com",
    query: bytes = b"",
    path_params: dict[str, str] | None = None,
) -> Request:
    return Request(
        method="GET",
        path="/",
        headers=Headers.from_dict({"host": host}),
        query=QueryParams(query),
        path_params=path_params or {},
    )


def _runtime(root: Path, **overrides: object) -> VueRuntime:
    return VueRuntime(VueConfig(root_directory=root, **overrides))  # type: ignore[arg-type]


def _evaluate_template_literal(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: m.group(1), text, flags=re.DOTALL)


def _page_params(page: str, key: str) -> object:
    """Decode ``pathParams``/``queryParams`` the way the page script does."""
    match = re.search(rf"{key}: `((?:[^`\\]|\\.)*)`", page, re.DOTALL)
    assert match is not None
    return json.loads(html.unescape(_evaluate_template_literal(match.group(1))))


def _page_state(page: str) -> object:
    match = re.search(r"^\s*state: (.*)$", page, re.MULTILINE)
    assert match is not None
    return json.loads(match.group(1))


class TestRouteTag:
    def test_bare_name_wrapped(self) -> None:
        assert route_tag("my-comp") == "<my-comp></my-comp>"

    def test_literal_tag_kept(self) -> None:
        assert route_tag('<my-comp :id="1"></my-comp>') == '<my-comp :id="1"></my-comp>'

    def test_component_id(self) -> None:
        assert component_id("<my-comp></my-comp>") == "my-comp"
        assert component_id('<my-comp :id="1"></my-comp>') == "my-comp"
        assert component_id("<my-comp>") == "my-comp"


class TestRenderDev:
    def test_layout_filled(self, vue_root: Path) -> None:
        html = VueComponent("user-page", runtime=_runtime(vue_root)).render(
            _request(host="localhost:8000")
        )
        assert "<style>body { margin: 0; }</style>" in html
        assert "/* vue development build */" in html
        assert "/* vue production build */" not in html
        assert '<script src="/webjars/vue@2.6.10/dist/vue.min.js">' in html
        assert 'new Vue({el: "#main-vue"});' in html
        assert "<user-page></user-page>" in html
        for placeholder in ("@inlineFile", "@componentRegistration", "@serverState",
                            "@routeComponent", "@cdnWebjar"):
            assert placeholder not in html

    def test_only_needed_components(self, vue_root: Path) -> None:
        html = VueComponent("user-card", runtime=_runtime(vue_root, is_dev=True)).render(
            _request()
        )
        assert "<!-- user-card.vue -->" in html
        assert "<!-- user-avatar.vue -->" in html
        assert "<!-- user-page.vue -->" not in html
        assert "unused-widget" not in html

    def test_state_follows_components_before_app_script(self, vue_root: Path) -> None:
        html = VueComponent("user-page", runtime=_runtime(vue_root, is_dev=True)).render(
            _request()
        )
        registration = html.index("<!-- user-page.vue -->")
        state = html.index("Vue.prototype.$perch = {")
        app_script = html.index('new Vue({el: "#main-vue"})')
        assert registration < state < app_script

    def test_edits_visible_without_restart(self, vue_root: Path) -> None:
        page = VueComponent("user-page", runtime=_runtime(vue_root, is_dev=True))
        page.render(_request())
        (vue_root / "js" / "app.js").write_text("/* edited */")
        assert "/* edited */" in page.render(_request())


class TestRenderProduction:
    def test_production_assets(self, vue_root: Path) -> None:
        html = VueComponent("user-page", runtime=_runtime(vue_root, is_dev=False)).render(
            _request()
        )
        assert "/* vue production build */" in html
        assert "/* vue development build */" not in html
        assert (
            '<script src="https://cdn.jsdelivr.net/webjars/org.webjars.npm/vue@2.6.10/'
            'dist/vue.min.js">' in html
        )

    def test_cached_files_ignore_new_components(self, vue_root: Path) -> None:
        runtime = _runtime(vue_root, is_dev=False)
        VueComponent("user-page", runtime=runtime).render(_request())
        (vue_root / "components" / "late-comer.vue").write_text(
            '<script>Vue.component("late-comer", {});</script>'
        )
        with pytest.raises(ComponentNotFoundError):
            VueComponent("late-comer", runtime=runtime).render(_request())

    def test_unoptimized_ships_everything(self, vue_root: Path) -> None:
        runtime = _runtime(vue_root, is_dev=False, optimize_dependencies=False)
        html = VueComponent("user-avatar", runtime=runtime).render(_request())
        assert "<!-- unused-widget.vue -->" in html
        assert "<!-- user-page.vue -->" in html


class TestState:
    def test_explicit_state(self, vue_root: Path) -> None:
        page = VueComponent("user-page", {"motd": "hello"}, runtime=_runtime(vue_root, is_dev=True))
        assert 'state: {"motd": "hello"}' in page.render(_request())

    def test_state_function(self, vue_root: Path) -> None:
        runtime = VueRuntime(
            VueConfig(root_directory=vue_root, is_dev=True),
            state_function=lambda request: {"user": request.path_params["id"]},
        )
        html = VueComponent("user-page", runtime=runtime).render(_request(path_params={"id": "7"}))
        assert 'state: {"user": "7"}' in html

    def test_params_embedded(self, vue_root: Path) -> None:
        html = VueComponent("user-page", runtime=_runtime(vue_root, is_dev=True)).render(
            _request(query=b"tab=posts", path_params={"id": "42"})
        )
        assert "pathParams: `{&quot;id&quot;: &quot;42&quot;}`" in html
        assert "queryParams: `{&quot;tab&quot;: [&quot;posts&quot;]}`" in html

    def test_placeholder_text_in_params_survives(self, vue_root: Path) -> None:
        page = VueComponent("user-page", runtime=_runtime(vue_root, is_dev=False)).render(
            _request(
                query=b"q=%40routeComponent&cdn=%40cdnWebjar%2Fvue.js",
                path_params={"id": "@serverState`${x}`\\"},
            )
        )
        assert _page_params(page, "queryParams") == {
            "q": ["@routeComponent"],
            "cdn": ["@cdnWebjar/vue.js"],
        }
        assert _page_params(page, "pathParams") == {"id": "@serverState`${x}`\\"}
        assert page.count("<user-page></user-page>") == 1

    def test_placeholder_text_in_state_survives(self, vue_root: Path) -> None:
        state = {
            "note": "@routeComponent",
            "cdn": "@cdnWebjar/x.js",
            "bio": "</script>@componentRegistration",
        }
        route = '<user-page :a="1"></user-page>'
        page = VueComponent(route, state, runtime=_runtime(vue_root, is_dev=True)).render(
            _request()
        )
        assert _page_state(page) == state
        assert page.count(route) == 1

    def test_state_computed_after_layout_inlines(
        self, make_vue_root, vue_files: dict[str, str]
    ) -> None:
        vue_files["layout.html"] += '<script>@inlineFile("/vue/js/missing.js")</script>\n'
        calls: list[Request] = []

        def load_state(request: Request) -> dict[str, str]:
            calls.append(request)
            return {}

        runtime = VueRuntime(
            VueConfig(root_directory=make_vue_root(vue_files), is_dev=True),
            state_function=load_state,
        )
        with pytest.raises(MalformedTemplateError):
            VueComponent("user-page", runtime=runtime).render(_request())
        assert calls == []


class TestErrors:
    def test_missing_component(self, vue_root: Path) -> None:
        page = VueComponent("my-comp", runtime=_runtime(vue_root, is_dev=False))
        with pytest.raises(ComponentNotFoundError) as exc_info:
            page.render(_request())
        assert exc_info.value.status == 500
        assert "<my-comp></my-comp>" in str(exc_info.value)

    def test_missing_component_unoptimized(self, vue_root: Path) -> None:
        runtime = _runtime(vue_root, is_dev=True, optimize_dependencies=False)
        with pytest.raises(ComponentNotFoundError):
            VueComponent("my-comp", runtime=runtime).render(_request())

    def test_failure_does_not_poison_cache(self, vue_root: Path) -> None:
        runtime = _runtime(vue_root, is_dev=False)
        with pytest.raises(ComponentNotFoundError):
            VueComponent("my-comp", runtime=runtime).render(_request())
        assert "<user-page></user-page>" in VueComponent("user-page", runtime=runtime).render(
            _request()
        )

    def test_unknown_inline_reference(self, make_vue_root, vue_files: dict[str, str]) -> None:
        vue_files["layout.html"] += '<script>@inlineFile("/vue/js/missing.js")</script>\n'
        root = make_vue_root(vue_files)
        with pytest.raises(MalformedTemplateError):
            VueComponent("user-page", runtime=_runtime(root, is_dev=True)).render(_request())

    def test_missing_layout(self, make_vue_root, vue_files: dict[str, str]) -> None:
        del vue_files["layout.html"]
        root = make_vue_root(vue_files)
        with pytest.raises(ConfigurationError, match="layout.html"):
            VueComponent("user-page", runtime=_runtime(root, is_dev=True)).render(_request())


class TestHandler:
    def test_response(self, vue_root: Path) -> None:
        response = VueComponent("user-page", runtime=_runtime(vue_root, is_dev=True))(_request())
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.header("Cache-Control") == "no-cache, no-store, must-revalidate"
        assert "<user-page></user-page>" in response.text

    def test_custom_cache_control(self, vue_root: Path) -> None:
        runtime = _runtime(vue_root, is_dev=False, cache_control="public, max-age=60")
        response = VueComponent("user-page", runtime=runtime)(_request())
        assert response.header("cache-control") == "public, max-age=60"

    def test_defaults_to_shared_runtime(self) -> None:
        assert VueComponent("x").runtime is VueRuntime.shared()
