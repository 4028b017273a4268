"""Highlight container handling for reviewed content.

This module provides the HighlightStyle class which wraps changed blocks
in a visually marked container and strips those containers back out
before a reviewed draft is published.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

DEFAULT_HIGHLIGHT_TAG = "div"
DEFAULT_HIGHLIGHT_STYLE = (
    "background-color: #e0f2fe; padding: 8px; margin: 8px 0; "
    "border-left: 3px solid #0ea5e9; border-radius: 4px;"
)


@dataclass(frozen=True)
class HighlightStyle:
    """Describes the container that marks a block as changed.

    The container is identified on the way back out by its tag name and
    its exact style attribute, so a custom style must stay unique within
    the documents it is applied to.

    Attributes:
        tag: Block-level tag name of the container
        style: Inline style attribute value of the container
    """

    tag: str = DEFAULT_HIGHLIGHT_TAG
    style: str = DEFAULT_HIGHLIGHT_STYLE

    @property
    def opening(self) -> str:
        return f'<{self.tag} style="{self.style}">'

    @property
    def closing(self) -> str:
        return f"</{self.tag}>"

    def wrap(self, markup: str) -> str:
        """Wrap block markup in the highlight container.

        Args:
            markup: Serialized markup of the changed block

        Returns:
            Markup wrapped in the highlight container
        """
        return f"{self.opening}{markup}{self.closing}"

    def _is_container(self, tag) -> bool:
        return tag.name == self.tag and tag.get("style") == self.style

    def count(self, html: str) -> int:
        """Count highlight containers present in HTML.

        Args:
            html: HTML fragment, typically detector output

        Returns:
            Number of highlight containers found
        """
        if not html or not html.strip():
            return 0
        soup = BeautifulSoup(html, "html.parser")
        return len(soup.find_all(self._is_container))

    def strip(self, html: str) -> str:
        """Remove every highlight container, keeping the wrapped markup.

        Args:
            html: HTML fragment that may contain highlight containers

        Returns:
            HTML with the containers unwrapped
        """
        if not html or not html.strip():
            return ""
        soup = BeautifulSoup(html, "html.parser")
        containers = soup.find_all(self._is_container)
        for container in containers:
            container.unwrap()
        logger.debug(f"Stripped {len(containers)} highlight container(s)")
        return soup.decode()


def strip_highlights(html: str, style: Optional[HighlightStyle] = None) -> str:
    """Strip highlight containers using the given or the default style."""
    return (style or HighlightStyle()).strip(html)
