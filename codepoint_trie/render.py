"""Human-readable rendering of a trie's shape.

The output is a debugging aid, not an interchange format. Each stored key
ends a line; a child starts a new line indented by its depth whenever its
parent is terminal or has siblings, so single-child chains print as one run
of characters:

    a  (1)
     bc  (2)
    d  (3)
    e  (4)
"""

from typing import List, Tuple

from .node import Node, EmptyNode, BranchNode, iter_children

EMPTY_SENTINEL = "[empty]"


def render_tree(root: Node, show_content: bool = False) -> str:
    """Render the tree below root.

    Args:
        root: Root node of the tree.
        show_content: Append "  (<payload>)" after terminal nodes that
            hold a payload.

    Returns:
        The rendering, one line per stored key, each ending in a newline.
    """
    if isinstance(root, EmptyNode):
        return EMPTY_SENTINEL + "\n"

    out: List[str] = []
    at_line_start = True

    content = _content(root) if show_content else ""
    if content:
        out.append(content)
        at_line_start = False
    if not isinstance(root, BranchNode):
        out.append("\n")
        return "".join(out)

    # (parent, code point, child, depth of child)
    stack: List[Tuple[BranchNode, str, Node, int]] = [
        (root, ch, child, 1)
        for ch, child in reversed(list(root.sorted_children()))
    ]
    while stack:
        parent, ch, node, depth = stack.pop()

        if parent.is_terminal or len(parent.children) > 1:
            if not at_line_start:
                out.append("\n")
            out.append(" " * (depth - 1))
        out.append(ch)
        if show_content:
            out.append(_content(node))
        at_line_start = False

        if not isinstance(node, BranchNode):
            out.append("\n")
            at_line_start = True
            continue
        for child_ch, child in reversed(list(iter_children(node))):
            stack.append((node, child_ch, child, depth + 1))

    return "".join(out)


def _content(node: Node) -> str:
    if not node.is_terminal or node.payload is None:
        return ""
    return f"  ({node.payload})"
