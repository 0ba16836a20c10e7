"""Tests for the group identity tree."""

from facet_core.table import ROOT_GROUP_ID, GroupID


def test_root_is_its_own_parent() -> None:
    """The root is a fixed point of parent and renders as '/'."""
    assert ROOT_GROUP_ID.parent is ROOT_GROUP_ID
    assert ROOT_GROUP_ID.label is None
    assert ROOT_GROUP_ID.is_root()
    assert str(ROOT_GROUP_ID) == "/"


def test_extend_allocates_distinct_nodes() -> None:
    """Extending with a duplicate label still yields a new, distinct group."""
    a = ROOT_GROUP_ID.extend("x")
    b = ROOT_GROUP_ID.extend("x")

    assert a != b
    assert a is not b
    assert len({a, b}) == 2
    # Same diagnostic path despite being different groups
    assert str(a) == str(b) == "/x"


def test_parent_and_label() -> None:
    """Children remember their parent and label."""
    child = ROOT_GROUP_ID.extend(1)
    grandchild = child.extend("b")

    assert grandchild.parent is child
    assert child.parent is ROOT_GROUP_ID
    assert grandchild.label == "b"
    assert not grandchild.is_root()


def test_string_path() -> None:
    """String renders each level as /<label> from the root down."""
    gid = ROOT_GROUP_ID.extend("a").extend(2).extend(None)
    assert str(gid) == "/a/2/None"
    assert repr(gid) == "GroupID(/a/2/None)"


def test_ancestors_excludes_root() -> None:
    """ancestors() walks up from the node and stops before the root."""
    a = ROOT_GROUP_ID.extend("a")
    b = a.extend("b")

    assert list(b.ancestors()) == [b, a]
    assert list(ROOT_GROUP_ID.ancestors()) == []


def test_new_root_is_not_the_shared_root() -> None:
    """Identity is per allocation, so a second parentless node is a different tree."""
    other = GroupID()
    assert other.is_root()
    assert other != ROOT_GROUP_ID
