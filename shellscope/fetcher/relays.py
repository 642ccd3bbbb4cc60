"""Built-in retrieval routes and redirect shortcuts.

Routes are tried in the order configured by ``Settings.relay_order``.
The relays are public CORS proxies. The direct route is tried first and
the relays act as fallbacks for hosts that block or rate-limit us.
"""

import re

from shellscope.fetcher.types import RedirectShortcut, RelayRoute, ResponseShape

DIRECT = RelayRoute(name="direct", direct=True)

CORSPROXY = RelayRoute(
    name="corsproxy",
    prefix="https://corsproxy.io/?",
)

ALLORIGINS = RelayRoute(
    name="allorigins",
    prefix="https://api.allorigins.win/get?url=",
    response_shape=ResponseShape.JSON_CONTENTS,
    quote_target=True,
)

# cors-anywhere rewrites response headers and refuses requests without
# an X-Requested-With or Origin header.
CORS_ANYWHERE = RelayRoute(
    name="cors-anywhere",
    prefix="https://cors-anywhere.herokuapp.com/",
    headers={"X-Requested-With": "XMLHttpRequest"},
)

BUILTIN_ROUTES: dict[str, RelayRoute] = {
    route.name: route for route in (DIRECT, CORSPROXY, ALLORIGINS, CORS_ANYWHERE)
}

DEFAULT_SHORTCUTS: tuple[RedirectShortcut, ...] = (
    RedirectShortcut(
        pattern=re.compile(r"christitus\.com/win"),
        target="https://github.com/ChrisTitusTech/winutil/releases/latest/download/winutil.ps1",
        title="ChrisTitus Windows Utility Script",
        notes=(
            "This script typically contains PowerShell commands for Windows optimization",
            "Common features: Windows debloating tools, system optimization settings,",
            "software installation utilities and registry modifications",
            "This script makes significant system changes",
        ),
    ),
)


def resolve_routes(names: list[str]) -> list[RelayRoute]:
    """Map configured route names to RelayRoute objects, preserving order.

    Raises:
        ValueError: If a name does not match a built-in route.
    """
    routes: list[RelayRoute] = []
    for name in names:
        route = BUILTIN_ROUTES.get(name)
        if route is None:
            valid = ", ".join(sorted(BUILTIN_ROUTES))
            raise ValueError(f"Unknown relay route '{name}'. Valid options: {valid}")
        routes.append(route)
    return routes
