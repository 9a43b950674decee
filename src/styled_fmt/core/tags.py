"""Tag classifier: decide whether a tag expression marks a styling template."""

from collections.abc import Collection

from tree_sitter import Node

from styled_fmt.models import TagShape


def _identifier_name(node: Node | None) -> str | None:
    if node is None or node.type != "identifier" or node.text is None:
        return None
    return node.text.decode("utf-8")


def _member_root_name(node: Node | None) -> str | None:
    if node is None or node.type != "member_expression":
        return None
    return _identifier_name(node.child_by_field_name("object"))


def classify_tag(tag: Node, names: Collection[str]) -> TagShape | None:
    """Return the shape of ``tag`` if it is a recognized styling tag, else ``None``.

    Total over the four shapes: ``css``, ``styled.div``, ``styled(Base)`` and
    ``styled.withConfig(...)``. Anything else is not a styling tag.
    """
    if tag.type == "identifier":
        return TagShape.IDENTIFIER if _identifier_name(tag) in names else None
    if tag.type == "member_expression":
        return TagShape.MEMBER if _member_root_name(tag) in names else None
    if tag.type == "call_expression":
        callee = tag.child_by_field_name("function")
        if _identifier_name(callee) in names:
            return TagShape.CALL
        if _member_root_name(callee) in names:
            return TagShape.CALL_MEMBER
    return None


def is_styling_tag(tag: Node, names: Collection[str]) -> bool:
    return classify_tag(tag, names) is not None
