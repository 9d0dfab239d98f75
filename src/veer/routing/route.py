"""Route: an immutable binding of a compiled path pattern to a Resource."""

from __future__ import annotations

from dataclasses import dataclass

from veer.config import RouterConfig
from veer.routing.pattern import Matcher, PathPattern, compile_pattern
from veer.routing.resource import Resource


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created by ``Router.route()``; the matcher is compiled once, under the
    router's configuration at that moment.
    """

    pattern: PathPattern
    resource: Resource
    matcher: Matcher

    @classmethod
    def compile(
        cls,
        pattern: PathPattern,
        resource: Resource,
        config: RouterConfig | None = None,
    ) -> Route:
        config = config or RouterConfig()
        matcher = compile_pattern(
            pattern,
            strict=config.strict,
            case_sensitive=config.case_sensitive,
        )
        return cls(pattern=pattern, resource=resource, matcher=matcher)

    def match(self, path: str) -> bool:
        return self.matcher.match(path)

    def params(self, path: str) -> dict[str, str] | None:
        """Decoded path parameters, or ``None`` if *path* doesn't match."""
        return self.matcher.extract_params(path)
