"""
project: Delve
module: server.py
License: MIT

Server bootstrap: builds the app, configures logging and runs the Flask
development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from delve import create_app

_HANDLER_TAG = "_delve_handler"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the HTTP server.

    Also configures application logging to a rotating file and console.
    """
    app = create_app()
    _configure_logging(app)
    try:
        print(f"[INFO] Starting Delve server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app):
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/app.log. Retains a few backups to avoid growth.
    Re-running replaces previously installed handlers instead of stacking them.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG, False):
            root.removeHandler(h)
            h.close()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    for h in (file_handler, console):
        setattr(h, _HANDLER_TAG, True)
        root.addHandler(h)

    logging.getLogger("werkzeug").setLevel(logging.INFO)
    return log_path
