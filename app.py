from __future__ import annotations

import logging

from bmo.config import configure_logging, load_settings
from bmo.webhooks.server import create_app

logger = logging.getLogger(__name__)


def build_app():
	"""Build the admission webhook Flask app from the configured settings."""
	settings = load_settings()
	configure_logging(settings.log_level)
	app = create_app()
	app.config['bmo_settings'] = settings
	logger.info(f"Admission webhook server configured on port {settings.webhook_port}")
	return app


# Build app at module level (for gunicorn)
app = build_app()


if __name__ == "__main__":
	settings = app.config['bmo_settings']
	app.run(host="0.0.0.0", port=settings.webhook_port)
