"""Unit tests for the TreeBuilder class."""

import asyncio

import pytest
from anytree import PreOrderIter

from treegenius.cancellation import CancellationToken
from treegenius.exceptions import BuildFailedError, PassCancelledError
from treegenius.exclusion_rules.base_rules import BaseExclusionRules
from treegenius.exclusion_rules.segment_rules import SegmentExclusionRules
from treegenius.path_tree.statistics import TreeStatistics
from treegenius.path_tree.tree_builder import TreeBuilder, split_entry_path
from treegenius.path_tree.tree_node import DirectoryNode, FileNode
from treegenius.types import PathEntry


def build(entries, ignores=(), **kwargs):
    builder = TreeBuilder(SegmentExclusionRules(ignores), **kwargs)
    return asyncio.run(builder.build(entries))


def names(directory):
    return sorted(node.name for node in directory.iter_children())


@pytest.mark.parametrize(
    "path, expected",
    [
        ("root/a.txt", (["a.txt"], False)),
        ("root/sub/b.txt", (["sub", "b.txt"], False)),
        ("root//sub///b.txt", (["sub", "b.txt"], False)),
        ("root\\sub\\b.txt", (["sub", "b.txt"], False)),
        ("root/sub/", (["sub"], True)),
        ("root", ([], False)),
        ("", ([], False)),
    ],
)
def test_split_entry_path(path, expected):
    assert split_entry_path(path) == expected


def test_build_scenario(scenario_entries):
    root, stats = build(scenario_entries, ignores={".git"})

    assert names(root) == ["a.txt", "sub"]
    sub = root.get_child("sub")
    assert isinstance(sub, DirectoryNode)
    assert names(sub) == ["b.txt"]
    assert sub.get_child("b.txt").file_size == 20
    assert stats == TreeStatistics(directory_count=1, file_count=2, total_bytes=30)


def test_ignored_entry_contributes_nothing():
    root, stats = build([("root/.git/objects/ab", 100), ("root/.git/HEAD", 5)], ignores={".git"})
    assert names(root) == []
    assert stats == TreeStatistics()


def test_filter_only_rule_type():
    class HiddenNames(BaseExclusionRules):
        def exclude(self, segments):
            return any(segment.startswith(".") for segment in segments)

    root, stats = asyncio.run(
        TreeBuilder(HiddenNames()).build([("root/.env", 1), ("root/src/.cache/x", 2), ("root/src/a.py", 3)])
    )
    assert names(root) == ["src"]
    assert names(root.get_child("src")) == ["a.py"]
    assert stats == TreeStatistics(directory_count=1, file_count=1, total_bytes=3)


def test_shared_prefix_counted_once():
    entries = [
        ("root/src/app/a.py", 1),
        ("root/src/app/b.py", 2),
        ("root/src/c.py", 3),
    ]
    root, stats = build(entries)
    assert stats.directory_count == 2
    assert stats.file_count == 3
    assert stats.total_bytes == 6


def test_statistics_match_created_nodes():
    entries = [(f"root/d{i % 7}/e{i % 3}/f{i}.txt", i) for i in range(100)]
    root, stats = build(entries)
    nodes = list(PreOrderIter(root))[1:]
    assert stats.directory_count == sum(1 for node in nodes if isinstance(node, DirectoryNode))
    assert stats.file_count == sum(1 for node in nodes if isinstance(node, FileNode))
    assert stats.total_bytes == sum(range(100))


def test_reinserting_same_path_is_idempotent():
    root, stats = build([("root/a/b.txt", 10), ("root/a/b.txt", 99)])
    assert root.get_child("a").get_child("b.txt").file_size == 10
    assert stats == TreeStatistics(directory_count=1, file_count=1, total_bytes=10)


def test_malformed_entries_are_skipped():
    root, stats = build([("", 0), ("root", 0), ("root/", 0), ("root/a.txt", 1)])
    assert names(root) == ["a.txt"]
    assert stats.file_count == 1


def test_directory_entries():
    root, stats = build([("root/empty/", 0), ("root/empty/nested/", 0)])
    empty = root.get_child("empty")
    assert isinstance(empty, DirectoryNode)
    assert isinstance(empty.get_child("nested"), DirectoryNode)
    assert stats == TreeStatistics(directory_count=2, file_count=0, total_bytes=0)


def test_conflict_first_type_wins_file_then_directory():
    root, stats = build([("root/data", 4), ("root/data/inner.txt", 8)])
    assert isinstance(root.get_child("data"), FileNode)
    assert stats == TreeStatistics(directory_count=0, file_count=1, total_bytes=4)


def test_conflict_first_type_wins_directory_then_file():
    root, stats = build([("root/data/inner.txt", 8), ("root/data", 4)])
    data = root.get_child("data")
    assert isinstance(data, DirectoryNode)
    assert names(data) == ["inner.txt"]
    assert stats == TreeStatistics(directory_count=1, file_count=1, total_bytes=8)


@pytest.mark.parametrize("size", [-1, "10", 1.5, None, True])
def test_invalid_size_fails_build(size):
    with pytest.raises(BuildFailedError) as exc_info:
        build([("root/ok.txt", 1), ("root/bad.txt", size)])
    assert isinstance(exc_info.value.cause, (TypeError, ValueError))
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_malformed_entry_shape_fails_build():
    with pytest.raises(BuildFailedError):
        build([("root/a.txt",)])


def test_accepts_path_entries_and_generators():
    root, stats = build(PathEntry(f"root/f{i}", 1) for i in range(5))
    assert stats.file_count == 5


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        TreeBuilder(batch_size=0)


def test_cancelled_before_start():
    token = CancellationToken()
    token.cancel()
    with pytest.raises(PassCancelledError):
        build([("root/a.txt", 1)], cancellation_token=token)


def test_cancel_before_second_batch_completes():
    """Cancelling while the first batch boundary is pending aborts the build."""
    entries = [PathEntry(f"root/dir{i % 50}/file{i}.txt", 1) for i in range(5000)]
    token = CancellationToken()
    builder = TreeBuilder(cancellation_token=token, batch_size=1000)

    async def scenario():
        task = asyncio.create_task(builder.build(entries))
        # Let the build run its first batch and reach its first suspension point
        await asyncio.sleep(0)
        assert not task.done()
        token.cancel()
        with pytest.raises(PassCancelledError):
            await task

    asyncio.run(scenario())


def test_build_yields_to_event_loop():
    """Other tasks get to run while a large input is being folded."""
    entries = [PathEntry(f"root/file{i}", 1) for i in range(3000)]
    ticks = []

    async def ticker():
        while True:
            ticks.append(1)
            await asyncio.sleep(0)

    async def scenario():
        tick_task = asyncio.create_task(ticker())
        await TreeBuilder(batch_size=500).build(entries)
        tick_task.cancel()

    asyncio.run(scenario())
    assert len(ticks) >= 5
