"""Shared fixtures: a small Vue root written into ``tmp_path``."""

from collections.abc import Callable
from pathlib import Path

import pytest

LAYOUT = """<html>
<head>
    <style>@inlineFile("/vue/styles/app.css")</style>
    <script src="@cdnWebjar/vue@2.6.10/dist/vue.min.js"></script>
    <script>@inlineFileDev("/vue/js/vue-dev.js")</script>
    <script>@inlineFileNotDev("/vue/js/vue-prod.js")</script>
</head>
<body>
<main id="main-vue" v-cloak>
    @routeComponent
</main>
@componentRegistration
<script>
    @inlineFile("/vue/js/app.js")
</script>
</body>
</html>
"""

APP_FRAME = """<template id="app-frame">
    <div class="frame"><slot></slot></div>
</template>
<script>
    Vue.component("app-frame", {template: "#app-frame"});
</script>
"""

USER_AVATAR = """<template id="user-avatar">
    <img :src="user.avatar">
</template>
<script>
    Vue.component("user-avatar", {template: "#user-avatar", props: ["user"]});
</script>
"""

USER_CARD = """<template id="user-card">
    <div class="card">
        <user-avatar :user="user"></user-avatar>
        <span>{{ user.name }}</span>
    </div>
</template>
<script>
    Vue.component("user-card", {template: "#user-card", props: ["user"]});
</script>
"""

USER_PAGE = """<template id="user-page">
    <app-frame>
        <user-card :user="$perch.state.user"></user-card>
    </app-frame>
</template>
<script>
    Vue.component("user-page", {template: "#user-page"});
</script>
"""

UNUSED_WIDGET = """<template id="unused-widget">
    <p>never mounted</p>
</template>
<script>
    Vue.component('unused-widget', {template: "#unused-widget"});
</script>
"""

VUE_FILES: dict[str, str] = {
    "layout.html": LAYOUT,
    "components/app-frame.vue": APP_FRAME,
    "components/unused-widget.vue": UNUSED_WIDGET,
    "components/user-avatar.vue": USER_AVATAR,
    "components/user-card.vue": USER_CARD,
    "components/user-page.vue": USER_PAGE,
    "js/app.js": 'new Vue({el: "#main-vue"});',
    "js/vue-dev.js": "/* vue development build */",
    "js/vue-prod.js": "/* vue production build */",
    "styles/app.css": "body { margin: 0; }",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_vue_root(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory writing a Vue root (``<tmp>/vue``) from ``{relative: content}``."""

    def make(files: dict[str, str]) -> Path:
        return write_tree(tmp_path / "vue", files)

    return make


@pytest.fixture
def vue_root(make_vue_root: Callable[[dict[str, str]], Path]) -> Path:
    """The default Vue root: layout, five components, scripts and a stylesheet."""
    return make_vue_root(VUE_FILES)


@pytest.fixture
def vue_files() -> dict[str, str]:
    """A mutable copy of the default Vue root contents."""
    return dict(VUE_FILES)
