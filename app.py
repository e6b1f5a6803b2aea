import logging

from flask import Flask, jsonify
from config import Config
from routes import health_bp, booking_bp, court_bp, user_bp

from models import db
from flask_migrate import Migrate
from services.errors import BookingError

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(court_bp)
    app.register_blueprint(user_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.errorhandler(BookingError)
    def _booking_error(exc: BookingError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        # JSON API only, nothing to embed
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp


    register_cli(app)


    return app

#-------------------------
import click
from models.court import Court

def register_cli(app):
    @app.cli.command("create-court")
    @click.argument("name")
    @click.option("--surface", default=None, help="Playing surface, e.g. synthetic or clay.")
    def create_court(name, surface):
        """Register a bookable court (bootstrap)."""
        name = name.strip()
        if not name:
            click.echo("Court name required")
            return

        existing = Court.query.filter_by(name=name).first()
        if existing:
            click.echo(f"Court '{name}' already exists (id={existing.id})")
            return

        court = Court(name=name, surface=(surface or "").strip() or None)
        db.session.add(court)
        db.session.commit()

        click.echo(f"Court '{court.name}' created (id={court.id})")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
