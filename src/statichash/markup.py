"""
Markup helpers that embed fingerprinted URLs.

Each helper resolves its files on the first ``html()`` call and reuses the
rendered markup afterwards. With caching disabled the markup is rebuilt on
every call so edits on disk show up immediately. Two threads rendering the
same helper for the first time may both resolve; they produce identical
markup, so no lock is taken.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from markupsafe import Markup, escape

from .resolver import Resolver


def render_attributes(attributes: dict[str, str | None]) -> Markup:
    """Render ``name="value"`` pairs, skipping empty values."""
    parts = [
        Markup('{}="{}"').format(Markup(name), escape(value))
        for name, value in attributes.items()
        if value
    ]
    return Markup(" ").join(parts)


class _MemoizedMarkup(ABC):
    resolver: Resolver
    _rendered: Markup | None

    @abstractmethod
    def _render(self) -> Markup:
        """Build the element markup from freshly resolved URLs."""

    def html(self) -> Markup:
        """
        Render the element.

        Raises:
            AssetResolutionError: A referenced file cannot be read
        """
        if not self.resolver.config.cache_enabled or self._rendered is None:
            self._rendered = self._render()
        return self._rendered

    def __html__(self) -> str:
        return str(self.html())


@dataclass
class LinkStyle(_MemoizedMarkup):
    """``<link rel="stylesheet">`` for one or more combined stylesheets."""

    resolver: Resolver
    href: Sequence[str]
    _rendered: Markup | None = field(default=None, init=False, repr=False, compare=False)

    def _render(self) -> Markup:
        url = self.resolver.resolve(self.href)
        return Markup("<link {}>").format(
            render_attributes({"rel": "stylesheet", "href": url})
        )


@dataclass
class Script(_MemoizedMarkup):
    """``<script src>`` for one or more combined scripts."""

    resolver: Resolver
    src: Sequence[str]
    _rendered: Markup | None = field(default=None, init=False, repr=False, compare=False)

    def _render(self) -> Markup:
        url = self.resolver.resolve(self.src)
        return Markup("<script {}></script>").format(render_attributes({"src": url}))

    def urls(self) -> list[str]:
        """The combined script URL, for script loaders that take URL lists."""
        return [self.resolver.resolve(self.src)]


@dataclass
class Img(_MemoizedMarkup):
    """``<img>`` with a fingerprinted ``src``."""

    resolver: Resolver
    src: str
    id: str = ""
    class_: str = ""
    style: str = ""
    alt: str = ""
    _rendered: Markup | None = field(default=None, init=False, repr=False, compare=False)

    def _render(self) -> Markup:
        url = self.resolver.url(self.src)
        attributes = render_attributes(
            {
                "id": self.id,
                "class": self.class_,
                "style": self.style,
                "src": url,
                "alt": self.alt,
            }
        )
        return Markup("<img {}>").format(attributes)
