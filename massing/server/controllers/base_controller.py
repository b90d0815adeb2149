from datetime import datetime, timezone
from typing import Dict, Any, Optional
import logging

from massing.core import ResponseKey
from massing.server.enums import ServiceStatus, ServerStatus
logger = logging.getLogger(__name__)


class ServerController:
    """Server lifecycle plus an aggregated status view over the registered services"""

    def __init__(self, services: Optional[Dict[str, Any]] = None):
        """
        Args:
            services: Optional dictionary of service name -> service instance
        """
        self._services = services or {}
        self._status = ServerStatus.STARTING
        self._started_at: Optional[datetime] = None

    @property
    def status(self) -> ServerStatus:
        return self._status

    def initialize(self) -> None:
        """Mark the server as running once every service reports a status"""
        logger.info(f"Initializing server controller with services: {', '.join(self._services) or 'none'}")
        try:
            for service_name, service in self._services.items():
                if not hasattr(service, 'get_status'):
                    raise TypeError(f"Service '{service_name}' does not expose get_status()")
            self._started_at = datetime.now(timezone.utc)
            self._status = ServerStatus.RUNNING
        except Exception as e:
            self._status = ServerStatus.ERROR
            logger.error(f"Failed to initialize server controller: {str(e)}")
            raise

    def stop(self) -> None:
        self._status = ServerStatus.STOPPED

    def get_status(self) -> Dict[str, Any]:
        """
        Returns:
            Server status with one entry per registered service
        """
        services = {
            name: service.get_status() if hasattr(service, 'get_status') else ServiceStatus.READY.value
            for name, service in self._services.items()
        }
        status = {
            ResponseKey.STATUS.value: self._status.value,
            ResponseKey.SERVICES.value: services
        }
        if self._started_at is not None:
            status["started_at"] = self._started_at.isoformat()
        return status
