"""Structural normalizer for repairing list markup before publishing.

This module provides the StructuralNormalizer class which rewrites list
markup that a strict CMS rich-text renderer would reject or mangle:

1. Items left unclosed (nested directly in another <li>) become
   siblings, then nested lists are flattened into their parent list and
   lifted items get a sub-item marker
2. Orphaned <li> elements are adopted into a new <ul>
3. Paragraphs holding nothing but <li> elements become a <ul>
4. Lists and items get role="list" / role="listitem"
5. Bare <span> wrappers filling a whole <li> are unwrapped
6. <div> elements wrapping nothing but a list are replaced by the list

The passes always run in this order. The full sequence is repeated until
a round changes nothing, so normalizing already-normalized HTML is a no-op.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .block_parser import has_widget_attributes
from .models import NormalizerSettings

logger = logging.getLogger(__name__)

LIST_TAGS = ["ul", "ol"]
INLINE_WRAPPER_TAGS = ["span"]
GENERIC_CONTAINER_TAGS = ["div"]
DASH_MARKERS = ("—", "–", "‒", "―", "-", "•")


def _is_ignorable(node) -> bool:
    """Whitespace-only text and comments do not count as content."""
    if isinstance(node, Comment):
        return True
    return isinstance(node, NavigableString) and not node.strip()


def _element_children(tag: Tag) -> Optional[List[Tag]]:
    """Return the element children of tag.

    Returns None if tag also holds text that is not whitespace, so callers
    can tell "only these elements" apart from "these elements and text".
    """
    children = []
    for node in tag.contents:
        if isinstance(node, Tag):
            children.append(node)
        elif not _is_ignorable(node):
            return None
    return children


class StructuralNormalizer:
    """Repairs list structure in HTML fragments.

    Attributes:
        settings: Marker, pass budgets and role values
    """

    def __init__(self, settings: Optional[NormalizerSettings] = None):
        """Initialize StructuralNormalizer with html.parser.

        Args:
            settings: Normalizer options (defaults when None)
        """
        self.settings = settings or NormalizerSettings()
        self.parser = "html.parser"

    def normalize(self, html: str) -> str:
        """Rewrite an HTML fragment into structurally valid list markup.

        Never raises for malformed input; the result is whatever the
        passes converge to within their budgets.

        Args:
            html: HTML fragment

        Returns:
            Repaired HTML fragment, empty for empty input
        """
        if not html or not html.strip():
            return ""

        soup = BeautifulSoup(html, self.parser)

        for round_number in range(1, self.settings.max_rounds + 1):
            repairs = self._run_passes(soup)
            logger.debug(f"Normalization round {round_number}: {repairs} repair(s)")
            if repairs == 0:
                break
        else:
            logger.warning(
                f"List normalization did not settle within {self.settings.max_rounds} rounds"
            )

        return soup.decode()

    def _run_passes(self, soup: BeautifulSoup) -> int:
        """Run all six passes once, returning the number of repairs made."""
        split = self._split_unclosed_items(soup)
        flattened = self._flatten_nested_lists(soup)
        adopted = self._adopt_orphans(soup)
        collapsed = self._collapse_item_paragraphs(soup)
        tagged = self._tag_roles(soup)
        unwrapped = self._unwrap_inline_wrappers(soup)
        lifted = self._unwrap_list_containers(soup)

        # Moves and unwraps leave adjacent text nodes; merge them so the
        # tree matches what re-parsing the output would give
        soup.smooth()

        logger.debug(
            f"  split={split}, flattened={flattened}, adopted={adopted}, "
            f"collapsed={collapsed}, tagged={tagged}, unwrapped={unwrapped}, "
            f"containers={lifted}"
        )
        return split + flattened + adopted + collapsed + tagged + unwrapped + lifted

    # ===== Pass 1: nested-list flattening =====

    def _split_unclosed_items(self, soup: BeautifulSoup) -> int:
        """Turn <li> elements nested directly in an <li> into siblings.

        html.parser does not close an open <li> when the next one starts,
        so "<li>a<li>b" arrives as b inside a. The nested item and
        everything after it move out to follow the parent item, which is
        where an HTML5 parser would have put them. No marker is added.

        Returns:
            Number of items moved
        """
        split = 0
        for item in soup.find_all("li"):
            parent = item.parent
            if parent is None or parent.name != "li":
                continue
            anchor = parent
            node = item
            while node is not None:
                following = node.next_sibling
                anchor.insert_after(node.extract())
                anchor = node
                node = following
            split += 1
        return split

    def _flatten_nested_lists(self, soup: BeautifulSoup) -> int:
        """Lift items of lists nested inside list items into the parent list.

        Each sweep handles the nested lists deepest-first, so a list is
        always empty of nested lists by the time it is lifted itself.
        The sweep budget bounds the work on adversarial input.

        Returns:
            Number of nested lists removed
        """
        removed = 0
        for _ in range(self.settings.max_flatten_passes):
            nested = [
                lst
                for lst in soup.find_all(LIST_TAGS)
                if lst.parent is not None and lst.parent.name == "li"
            ]
            if not nested:
                break
            for lst in reversed(nested):
                self._lift_items(lst)
                removed += 1
        return removed

    def _lift_items(self, nested_list: Tag) -> None:
        """Move the children of nested_list after its parent item, in order."""
        anchor = nested_list.parent
        for child in list(nested_list.contents):
            if isinstance(child, NavigableString) and not child.strip():
                continue
            child.extract()
            if isinstance(child, Tag) and child.name == "li":
                self._prefix_item(child)
            anchor.insert_after(child)
            anchor = child
        nested_list.decompose()

    def _prefix_item(self, item: Tag) -> None:
        """Prefix a lifted item with the sub-item marker, at most once."""
        marker = self.settings.sub_item_marker
        text = item.get_text().lstrip()
        if text.startswith(DASH_MARKERS) or text.startswith(marker):
            return

        first = item.contents[0] if item.contents else None
        if type(first) is NavigableString:
            first.replace_with(NavigableString(f"{marker} {first.lstrip()}"))
        else:
            item.insert(0, NavigableString(f"{marker} "))

    # ===== Pass 2: orphan adoption =====

    def _adopt_orphans(self, soup: BeautifulSoup) -> int:
        """Wrap runs of <li> elements that are not inside a list.

        Returns:
            Number of orphan items adopted
        """
        adopted = 0
        handled = set()

        for item in soup.find_all("li"):
            if id(item) in handled or self._in_list(item):
                continue

            run = self._orphan_run(item)
            handled.update(id(member) for member in run)

            container = self._new_list(soup)
            parent = item.parent
            siblings = _element_children(parent) if parent.name == "p" else None
            if siblings is not None and self._same_elements(siblings, run):
                parent.replace_with(container)
            else:
                item.insert_before(container)

            for member in run:
                self._tag_item(member)
                container.append(member.extract())
            adopted += len(run)

        return adopted

    @staticmethod
    def _in_list(item: Tag) -> bool:
        return item.parent is not None and item.parent.name in LIST_TAGS

    @staticmethod
    def _orphan_run(item: Tag) -> List[Tag]:
        """Collect item plus the orphan <li> siblings directly after it."""
        run = [item]
        node = item.next_sibling
        while node is not None:
            if isinstance(node, Tag):
                if node.name != "li":
                    break
                run.append(node)
            elif not _is_ignorable(node):
                break
            node = node.next_sibling
        return run

    @staticmethod
    def _same_elements(first: List[Tag], second: List[Tag]) -> bool:
        # Tag equality is structural; compare identity instead
        return len(first) == len(second) and all(a is b for a, b in zip(first, second))

    # ===== Pass 3: paragraph-of-items collapse =====

    def _collapse_item_paragraphs(self, soup: BeautifulSoup) -> int:
        """Replace <p> elements holding only <li> children with a <ul>.

        Returns:
            Number of paragraphs replaced
        """
        collapsed = 0
        for paragraph in soup.find_all("p"):
            children = _element_children(paragraph)
            if not children or any(child.name != "li" for child in children):
                continue

            container = self._new_list(soup)
            paragraph.replace_with(container)
            for child in children:
                self._tag_item(child)
                container.append(child.extract())
            collapsed += 1
        return collapsed

    # ===== Pass 4: role tagging =====

    def _tag_roles(self, soup: BeautifulSoup) -> int:
        """Add role attributes to lists and items that have none.

        Returns:
            Number of elements tagged
        """
        tagged = 0
        for lst in soup.find_all(LIST_TAGS):
            if not lst.has_attr("role"):
                lst["role"] = self.settings.list_role
                tagged += 1
        for item in soup.find_all("li"):
            if self._tag_item(item):
                tagged += 1
        return tagged

    def _tag_item(self, item: Tag) -> bool:
        if item.has_attr("role"):
            return False
        item["role"] = self.settings.list_item_role
        return True

    def _new_list(self, soup: BeautifulSoup) -> Tag:
        return soup.new_tag("ul", attrs={"role": self.settings.list_role})

    # ===== Pass 5: inline-wrapper unwrapping =====

    def _unwrap_inline_wrappers(self, soup: BeautifulSoup) -> int:
        """Unwrap bare <span> elements that make up an item's whole content.

        Returns:
            Number of wrappers removed
        """
        unwrapped = 0
        for item in soup.find_all("li"):
            while True:
                children = _element_children(item)
                if not children or len(children) != 1:
                    break
                wrapper = children[0]
                if wrapper.name not in INLINE_WRAPPER_TAGS:
                    break
                if any(wrapper.has_attr(name) for name in ("class", "id", "style")):
                    break
                wrapper.unwrap()
                unwrapped += 1
        return unwrapped

    # ===== Pass 6: redundant-container unwrapping =====

    def _unwrap_list_containers(self, soup: BeautifulSoup) -> int:
        """Replace <div> elements whose only child is a list with that list.

        Innermost containers go first so stacked wrappers collapse in one
        pass. Containers marked as widgets or embeds are left alone.

        Returns:
            Number of containers removed
        """
        removed = 0
        for container in reversed(soup.find_all(GENERIC_CONTAINER_TAGS)):
            if has_widget_attributes(container):
                continue
            children = _element_children(container)
            if not children or len(children) != 1 or children[0].name not in LIST_TAGS:
                continue
            container.replace_with(children[0].extract())
            removed += 1
        return removed


def normalize(html: str, settings: Optional[NormalizerSettings] = None) -> str:
    """Repair list structure with a one-off StructuralNormalizer."""
    return StructuralNormalizer(settings).normalize(html)
