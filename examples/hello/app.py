"""Hello World — the simplest perch app.

Demonstrates verb registration, named segments, early exits with
halt/redirect, and reverse routing with url_for.

Run:
    python app.py
"""

from wsgiref.simple_server import make_server

from perch import App

app = App()


def index(params, app):
    app.response.set_body("Hello, World!")


def greet(params, app):
    app.response.set_body(f"Hello, {params['name']}!")


def admin(params, app):
    app.halt(403, "Admins only")


def old_greeting(params, app):
    app.redirect(app.url_for("greet", name=params["name"]), 301)


def create_widget(params, app):
    app.response.set_status(201).set_header("X-Widget", params["slug"])
    app.response.set_body("Created")
    app.stop()


app.get("/", index)
app.get("/greet/:name", greet).name("greet")
app.map("/hello/:name", old_greeting)
app.map("/admin/*", admin).via("get", "post")
app.post("/widgets/:slug", create_widget)


if __name__ == "__main__":
    with make_server("127.0.0.1", 8000, app.wsgi_app) as server:
        server.serve_forever()
