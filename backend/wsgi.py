"""WSGI entry point."""

import os

from valhalla import create_app
from valhalla.scheduler import start_scheduler

app = create_app(os.environ.get("FLASK_ENV", "production"))

# Runs in this process because the store is in-memory; serve with one worker
scheduler = start_scheduler(app)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
