from flask import Flask, jsonify, request

from .errors import MissingRequiredField, NetworkError, ParseFailure, ValidationError
from .film_functions import film_id_from_url
from .scraper import FilmaffinityScraper

ERROR_STATUS = (
    (ValidationError, 400),
    (MissingRequiredField, 404),
    (NetworkError, 502),
    (ParseFailure, 500),
)


def create_app(scraper: FilmaffinityScraper | None = None):
    """
    Build the Flask application exposing the scraper.

    Args:
        scraper: Scraper instance to use; a default one is built lazily otherwise.

    Returns:
        Flask: Configured application.
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    state = {"scraper": scraper}

    def get_scraper():
        if state["scraper"] is None:
            state["scraper"] = FilmaffinityScraper()
        return state["scraper"]

    for error_cls, status in ERROR_STATUS:
        def handle(exc, status=status):
            app.logger.warning("%s: %s", type(exc).__name__, exc)
            return jsonify({"error": str(exc)}), status

        app.register_error_handler(error_cls, handle)

    @app.route("/films", methods=["GET"])
    def get_film():
        """
        Handle GET requests for a film page.

        Returns:
            Response: FilmInfo JSON payload.
        """
        film = get_scraper().fetch_film_info(request.args.get("url"))
        return jsonify(film.to_dict())

    @app.route("/films/id", methods=["GET"])
    def get_film_id():
        film_id = film_id_from_url(request.args.get("url"))
        if film_id is None:
            return jsonify({"error": "No film id in URL"}), 404
        return jsonify({"id": film_id})

    @app.route("/search", methods=["GET"])
    def search_films():
        """
        Handle GET requests for a title search.

        Returns:
            Response: List of search results, possibly empty.
        """
        results = get_scraper().search(request.args.get("q"), request.args.get("year"))
        return jsonify([result.to_dict() for result in results])

    return app
