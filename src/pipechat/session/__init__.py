from .controller import SessionController, ask

__all__ = ["SessionController", "ask"]
