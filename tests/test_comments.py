from yamlops.comments import CommentKind, get_comment, set_comment
from yamlops.node import Kind, Node


def _scalar(value, **comments):
    return Node(kind=Kind.SCALAR, tag="!!str", value=value, **comments)


def test_set_line_comment():
    node = _scalar("cat")
    set_comment(node, "single", CommentKind.LINE)
    assert node.line_comment == "single"
    assert node.head_comment == ""
    assert node.foot_comment == ""


def test_set_line_comment_from_other_value():
    node = _scalar("cat")
    other = _scalar("dog")
    set_comment(node, other.value, CommentKind.LINE)
    assert get_comment(node, CommentKind.LINE).value == "dog"


def test_get_line_comment():
    node = _scalar("cat", line_comment="# meow")
    result = get_comment(node, CommentKind.LINE)
    assert result.value == "meow"
    assert result.tag == "!!str"


def test_get_line_comment_on_key():
    key = _scalar("hello", line_comment="# hello-world-comment")
    assert get_comment(key, CommentKind.LINE).value == "hello-world-comment"


def test_get_head_comment_of_array_child():
    child = _scalar("first-array-child", head_comment="# under-name-comment")
    assert get_comment(child, CommentKind.HEAD).value == "under-name-comment"


def test_get_multiline_head_comment():
    node = _scalar("cat", head_comment="# welcome!\n# bob")
    assert get_comment(node, CommentKind.HEAD).value == "welcome!\nbob"


def test_get_foot_comment():
    node = _scalar("cat", foot_comment="# have a great day\n# no really")
    assert get_comment(node, CommentKind.FOOT).value == "have a great day\nno really"


def test_set_head_comment():
    node = Node(kind=Kind.MAPPING, tag="!!map")
    set_comment(node, "single", CommentKind.HEAD)
    assert node.head_comment == "single"
    assert get_comment(node, CommentKind.HEAD).value == "single"


def test_set_foot_comment_on_document():
    doc = Node(kind=Kind.DOCUMENT, content=[Node(kind=Kind.MAPPING, tag="!!map")])
    set_comment(doc, "cat", CommentKind.FOOT)
    assert doc.foot_comment == "# cat"
    assert get_comment(doc, CommentKind.FOOT).value == "cat"


def test_clear_foot_comment_on_document():
    doc = Node(kind=Kind.DOCUMENT, foot_comment="# hi")
    set_comment(doc, "", CommentKind.FOOT)
    assert doc.foot_comment == ""


def test_set_foot_comment_on_scalar():
    node = _scalar("cat")
    set_comment(node, "cat", CommentKind.FOOT)
    assert node.foot_comment == "cat"


def test_remove_line_comment_leaves_others():
    a = _scalar("cat", line_comment="# comment")
    b = _scalar("dog", line_comment="# leave this")
    set_comment(a, "", CommentKind.LINE)
    assert a.line_comment == ""
    assert b.line_comment == "# leave this"


def test_strip_all_comments():
    node = _scalar("cat", line_comment="# c", head_comment="# h", foot_comment="# f")
    set_comment(node, "")
    assert (node.line_comment, node.head_comment, node.foot_comment) == ("", "", "")


def test_set_all_comments():
    node = _scalar("cat")
    set_comment(node, "cat", CommentKind.ALL)
    assert node.line_comment == "cat"
    assert node.head_comment == "cat"
    assert node.foot_comment == "cat"


def test_line_takes_priority_when_several_kinds_requested():
    node = _scalar("cat", line_comment="# line", head_comment="# head")
    assert get_comment(node, CommentKind.LINE | CommentKind.HEAD).value == "line"


def test_missing_comment_is_empty():
    assert get_comment(_scalar("cat"), CommentKind.HEAD).value == ""