"""Hello Vue — server-rendered Vue component pages.

Demonstrates the layout directives, dependency-pruned component bundles,
path/query parameters and per-request server state.

Open http://localhost:8000/ to run in dev mode (unminified Vue, local
webjars, files re-read on every request). Any other host name switches
the process to production mode on its first request.

Run:
    python app.py
"""

from pathlib import Path

from perch import App, Request, VueConfig

GREETINGS = {"en": "Hello", "fr": "Bonjour", "de": "Hallo"}


def load_state(request: Request) -> dict[str, str]:
    lang = request.query.get("lang", "en")
    return {"greeting": GREETINGS.get(lang, GREETINGS["en"])}


app = App(
    VueConfig(root_directory=Path(__file__).parent / "vue"),
    state_function=load_state,
)

app.vue("/", "hello-world")
app.vue("/users/{name}", "user-profile")
app.vue("/about", "<hello-world :compact=\"true\"></hello-world>", state={"greeting": "Hi"})


@app.route("/health")
def health(request: Request) -> str:
    return "ok"


if __name__ == "__main__":
    app.run()
