# Overview: WSGI entrypoint; `python wsgi.py` serves the API on PORT (default 4000).

from novasalud import create_app

app = create_app()


if __name__ == "__main__":
    app.logger.info("Servidor corriendo en http://localhost:%s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"])
