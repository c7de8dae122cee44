"""Flask application serving profile cards.

Usage:
    flask --app src.web.app run --port 3000
    flask --app src.web.app render-card gabelogannewell card.png --theme light

Routes:
    GET /api/<uid>   Card for a vanity name or SteamID64.
    GET /api?uid=    Same, identifier in the query string.
"""

from __future__ import annotations

import logging

import click
from flask import Flask, Response, current_app, jsonify, request

from src.config import Config
from src.core.cache import CacheStore
from src.core.profile import privacy_settings_url
from src.render.theme import THEMES, RenderConfig
from src.services.card_service import CardService

logger = logging.getLogger("steamcard.web")

__all__ = ["CACHE_CONTROL", "create_app"]

CACHE_CONTROL = "public, max-age=3600, s-maxage=3600, stale-while-revalidate=86400"
ERROR_MESSAGE = "Failed to generate image"
EXTENSION_KEY = "steamcard"


def _card_service() -> CardService:
    return current_app.extensions[EXTENSION_KEY]


def create_app(
    config: Config | None = None,
    card_service: CardService | None = None,
    cache: CacheStore | None = None,
) -> Flask:
    """Builds the Flask app.

    Args:
        config: Configuration; loaded from the environment if None.
        card_service: Pre-built pipeline (tests inject a mock here).
        cache: Shared cache passed to a newly built CardService.

    Returns:
        The configured Flask application.
    """
    if config is None:
        config = Config()
    if card_service is None:
        card_service = CardService.build(config, cache)

    app = Flask(__name__)
    app.config["STEAMCARD"] = config
    app.extensions[EXTENSION_KEY] = card_service

    @app.after_request
    def _set_cache_headers(response: Response) -> Response:
        response.headers["Cache-Control"] = CACHE_CONTROL
        return response

    @app.get("/api")
    @app.get("/api/<uid>")
    def card(uid: str | None = None):
        uid = uid or request.args.get("uid")
        try:
            if not uid:
                raise ValueError("Missing uid parameter")

            country_code = request.args.get("country_code") or "US"
            render_config = RenderConfig.from_query(request.args)
            result = _card_service().generate(uid, country_code, render_config)
        except Exception:
            logger.exception("Failed to generate card for %r", uid)
            return jsonify(error=ERROR_MESSAGE), 500

        response = Response(result.png, mimetype="image/png")
        if result.restricted:
            response.headers["X-Privacy-Settings"] = privacy_settings_url(result.profile.steam_id)
        return response

    _register_cli(app)
    return app


def _register_cli(app: Flask) -> None:
    @app.cli.command("render-card")
    @click.argument("uid")
    @click.argument("output", type=click.Path(dir_okay=False, writable=True))
    @click.option("--country-code", default="US", show_default=True, help="Store region for prices.")
    @click.option("--theme", type=click.Choice(sorted(THEMES)), default=None, help="Color preset.")
    def render_card_command(uid, output, country_code, theme):
        """Render the card for UID and write it to OUTPUT as PNG.

        Usage:
            flask --app src.web.app render-card gabelogannewell card.png
            flask --app src.web.app render-card 76561197960287930 card.png --theme light
        """
        try:
            result = _card_service().generate(uid, country_code, RenderConfig(theme=theme))
        except Exception as e:
            logger.exception("Failed to render card for %r", uid)
            click.echo(f"[!] Error: {e}", err=True)
            raise SystemExit(1) from e

        with open(output, "wb") as f:
            f.write(result.png)

        click.echo(f"[+] Wrote {output} ({len(result.png)} bytes)")
        if result.restricted:
            click.echo(f"[*] Games list is private: {privacy_settings_url(result.profile.steam_id)}")
