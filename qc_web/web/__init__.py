from .controller import CheckController
from .routes import create_blueprint

__all__ = ["CheckController", "create_blueprint"]
