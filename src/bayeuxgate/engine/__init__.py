from .adapters import Engine, ReplyCallback, LoopbackEngine, create_engine

__all__ = ["Engine", "ReplyCallback", "LoopbackEngine", "create_engine"]
