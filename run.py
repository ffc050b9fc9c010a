"""Project root entry point for launching the web interface."""

from __future__ import annotations

import os


def main():
    from translink.web import create_app

    app = create_app()
    host = os.environ.get("TRANSLINK_HOST", "127.0.0.1")
    port = int(os.environ.get("TRANSLINK_PORT", "5500"))
    app.run(host=host, port=port, debug=os.environ.get("TRANSLINK_DEBUG") == "1")


if __name__ == "__main__":
    main()
