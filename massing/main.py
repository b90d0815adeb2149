"""Entry point: configure logging from the environment and serve the editor API"""
import logging
import os

from massing.server import ServerLauncher


def configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


def main() -> None:
    configure_logging()
    port = int(os.getenv("PORT", 8082))
    host = os.getenv("HOST", "0.0.0.0")
    debug = os.getenv("FLASK_DEBUG", "0").lower() in ("1", "true", "yes")

    application = ServerLauncher.create_application()
    ServerLauncher.run_server(application, host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
