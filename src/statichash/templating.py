"""
Jinja2 integration.

Registers template globals so pages can reference assets by logical name::

    {{ link_style("css/reset.css", "css/app.css") }}
    {{ script("js/vendor.js", "js/app.js") }}
    <img src="{{ static_url('img/logo.png') }}" alt="">

Each distinct argument list is resolved once and reused across renders.
With caching disabled every call resolves again.
"""

from __future__ import annotations

from jinja2 import Environment
from markupsafe import Markup

from .markup import LinkStyle, Script
from .resolver import Resolver


def register_template_globals(env: Environment, resolver: Resolver) -> None:
    """
    Install ``static_url``, ``link_style`` and ``script`` globals on ``env``.

    Resolution errors propagate out of template rendering.
    """
    urls: dict[tuple[str, ...], str] = {}
    styles: dict[tuple[str, ...], LinkStyle] = {}
    scripts: dict[tuple[str, ...], Script] = {}

    def static_url(*names: str) -> str:
        if not resolver.config.cache_enabled:
            return resolver.resolve(list(names))
        url = urls.get(names)
        if url is None:
            url = urls.setdefault(names, resolver.resolve(list(names)))
        return url

    def link_style(*names: str) -> Markup:
        helper = styles.get(names)
        if helper is None:
            helper = styles.setdefault(names, LinkStyle(resolver, list(names)))
        return helper.html()

    def script(*names: str) -> Markup:
        helper = scripts.get(names)
        if helper is None:
            helper = scripts.setdefault(names, Script(resolver, list(names)))
        return helper.html()

    env.globals["static_url"] = static_url
    env.globals["link_style"] = link_style
    env.globals["script"] = script
