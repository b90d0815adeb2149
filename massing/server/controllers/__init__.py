from massing.server.controllers.base_controller import ServerController

__all__ = ["ServerController"]
