"""Router and application configuration.

Both are frozen dataclasses: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Matching options applied to every route a Router compiles.

    Fixed when the Router is constructed::

        router = Router(RouterConfig(strict=True))
    """

    # Require trailing-slash presence to match the declared pattern exactly
    strict: bool = False
    # Compare literal segments case-sensitively
    case_sensitive: bool = False


@dataclass(frozen=True, slots=True)
class AppConfig:
    """ASGI application configuration.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development server only)
    reload: bool = True
