"""Tally engines that count decoded ballots into elected candidates."""

from .base import TallyEngine

# Engines by name, in registration order. Engine modules register
# themselves on import, so callers must import them first.
_tally_engines: dict[str, type[TallyEngine]] = {}


def register_tally_engine(engine_class: type[TallyEngine]) -> type[TallyEngine]:
    """Decorator to register a tally engine class under its name.

    Raises:
        ValueError: If another engine already has that name
    """
    name = engine_class().name
    existing = _tally_engines.get(name)
    if existing is not None and existing is not engine_class:
        raise ValueError(f"Tally engine {name!r} is already registered by {existing.__name__}")
    _tally_engines[name] = engine_class
    return engine_class


def get_all_tally_engines() -> list[TallyEngine]:
    """Return instances of all registered tally engines."""
    return [engine_class() for engine_class in _tally_engines.values()]


def get_tally_engine(name: str) -> TallyEngine | None:
    """Return an instance of the engine registered under this name, if any."""
    engine_class = _tally_engines.get(name)
    return engine_class() if engine_class is not None else None
