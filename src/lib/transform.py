"""
Tree transform: interactive tags in text leaves become structured nodes

The transform knows nothing about any particular Markdown library. It works
through the TextTree interface, which a tree library implements by telling
which nodes are text leaves and how to splice a child list.

For every text leaf holding a tag, the leaf is replaced by three siblings:

    text(before)  interaction(match)  text(after)

The walker then moves onto text(after), so a leaf holding several tags is
split repeatedly until no tag remains (fixpoint per leaf).
"""

from typing import Any, Dict, List, Optional, Protocol

from markdown_it.token import Token

from ..models.interaction import InteractionMatch
from .log import LOG
from .syntax import interaction_find


INTERACTION_TYPE = "interaction"
INTERACTION_TAG = "custom-variable"


class TextTree(Protocol):
    """
    Capabilities the transform needs from a document tree

    children_get returns the mutable child list of a node, or None for
    leaves. text_get returns the value of a text leaf, or None for any
    other node.
    """

    def children_get(self, node: Any) -> Optional[List[Any]]: ...

    def text_get(self, node: Any) -> Optional[str]: ...

    def children_splice(self, node: Any, index: int, replacement: List[Any]) -> None: ...

    def text_make(self, value: str) -> Any: ...

    def interaction_make(self, match: InteractionMatch) -> Any: ...


class MarkdownItTree:
    """
    TextTree over markdown-it-py tokens

    The root is the flat block-level token list returned by
    MarkdownIt.parse(); inline tokens expose their children. Interaction
    tokens have type "interaction", tag "custom-variable", the matched
    source as content and the descriptor in meta["interaction"].
    """

    def children_get(self, node: Any) -> Optional[List[Any]]:
        if isinstance(node, list):
            return node
        return node.children

    def text_get(self, node: Any) -> Optional[str]:
        if isinstance(node, Token) and node.type == "text":
            return node.content
        return None

    def children_splice(self, node: Any, index: int, replacement: List[Any]) -> None:
        children = self.children_get(node)
        children[index:index + 1] = replacement

    def text_make(self, value: str) -> Token:
        return Token("text", "", 0, content=value)

    def interaction_make(self, match: InteractionMatch) -> Token:
        return Token(
            INTERACTION_TYPE,
            INTERACTION_TAG,
            0,
            content=match.raw,
            meta={"interaction": match.interaction, "variant": match.variant},
        )


class DictTree:
    """
    TextTree over mdast-style dictionaries

    Text leaves look like {"type": "text", "value": "..."}; parents keep
    their children under "children". Interaction nodes are emitted as
    {"type": "element", "data": {"hName": "custom-variable",
    "hProperties": {...}}} for hast-style renderers.
    """

    def children_get(self, node: Any) -> Optional[List[Any]]:
        return node.get("children")

    def text_get(self, node: Any) -> Optional[str]:
        if node.get("type") == "text":
            return node.get("value", "")
        return None

    def children_splice(self, node: Any, index: int, replacement: List[Any]) -> None:
        node["children"][index:index + 1] = replacement

    def text_make(self, value: str) -> Dict[str, Any]:
        return {"type": "text", "value": value}

    def interaction_make(self, match: InteractionMatch) -> Dict[str, Any]:
        return {
            "type": "element",
            "data": {
                "hName": INTERACTION_TAG,
                "hProperties": match.interaction.properties_get(),
            },
        }


def tree_transform(root: Any, tree: TextTree, include_bare: bool = True) -> int:
    """
    Replace interactive tags in every text leaf under root

    Args:
        root: Root node of the document tree
        tree: TextTree implementation for the tree's node type
        include_bare: Also convert bare ?[label] buttons

    Returns:
        Number of tags converted
    """
    converted = 0
    pending = [root]

    while pending:
        node = pending.pop()
        children = tree.children_get(node)
        if not children:
            continue

        index = 0
        while index < len(children):
            child = children[index]
            value = tree.text_get(child)
            if value is None:
                pending.append(child)
                index += 1
                continue

            match = interaction_find(value, include_bare=include_bare)
            if match is None:
                index += 1
                continue

            tree.children_splice(node, index, [
                tree.text_make(value[:match.start]),
                tree.interaction_make(match),
                tree.text_make(value[match.end:]),
            ])
            children = tree.children_get(node)
            converted += 1
            # revisit the trailing literal
            index += 2

    LOG(f"Tree transform converted {converted} interactive tag(s)", level=3)
    return converted
