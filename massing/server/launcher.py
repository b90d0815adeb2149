"""Server launcher for starting the Flask application"""
import logging
from massing.server.application import ServerApplication


logger = logging.getLogger("logger")


class ServerLauncher:
    """Launcher class for the server application"""

    @staticmethod
    def create_application() -> ServerApplication:
        return ServerApplication()

    @staticmethod
    def run_server(
        app: ServerApplication,
        host: str = "0.0.0.0",
        port: int = 8082,
        debug: bool = False
    ) -> None:
        """
        Run the Flask development server.

        Args:
            app: ServerApplication instance to run
            host: Host to bind to (default: 0.0.0.0)
            port: Port to listen on (default: 8082)
            debug: Enable debug mode (default: False)
        """
        logger.info(f"Massing editor '{app.app.name}' starting on {host}:{port} (debug: {debug})")
        app.app.run(host=host, port=port, debug=debug, use_reloader=False)
