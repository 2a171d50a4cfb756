from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from src.library_api.runtime.config.config_data import ConfigData
from src.library_api.runtime.config.config_template import load_templated_yaml
from src.library_api.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Read config.yaml (or the file named by ``LIBRARY_API_CONFIG``)."""
    env = EnvironmentVariables()
    return load_templated_yaml(Path(env.config_file), env_mode=env.environment)


_default_context = AppContext(config=load_default_config())

_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily run with a different configuration.

    Sections not passed explicitly to ``ConfigData`` keep their defaults, not
    the values of the enclosing context.

    Example:
        with with_context(ConfigData(storage=StorageConfig(backend="redis"))):
            assert get_config().storage.backend == "redis"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    token = set_context(replace(get_context(), config=config_override))
    try:
        yield
    finally:
        _app_context.reset(token)
