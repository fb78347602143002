"""Flask app exposing the scrape trigger endpoint.

Usage:
    app = create_app()
    app.run(host="0.0.0.0", port=8000)
"""

from typing import Callable, Optional

from flask import Flask

from ..common.settings import Settings
from ..models import RunReport
from ..orchestrator import run_scrape
from .api import api


def create_app(
    runner: Optional[Callable[[], RunReport]] = None,
    secret: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        runner: Callable performing one run (defaults to a production
            Supabase run built from the settings)
        secret: Shared secret (defaults to SCRAPE_SECRET from the settings)
        settings: Environment settings (read from the environment if omitted)
    """
    settings = settings or Settings.from_env()

    if runner is None:
        def runner() -> RunReport:
            return run_scrape(settings)

    app = Flask(__name__)
    app.config["SCRAPE_RUNNER"] = runner
    app.config["SCRAPE_SECRET"] = settings.scrape_secret if secret is None else secret
    app.register_blueprint(api)
    return app
