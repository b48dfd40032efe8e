from typing import Any, Mapping, TypedDict, TypeVar

D = TypeVar("D", bound=TypedDict("D", {}))


def resolve_config(config: Mapping[str, Any] | None, default_config: D) -> D:
    """Overlay the keys of ``config`` that ``default_config`` knows about."""
    resolved = default_config.copy()
    for key in default_config:
        if config and key in config:
            resolved[key] = config[key]
    return resolved
