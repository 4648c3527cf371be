from typing import List, Optional

import pytest

from jenkins_matrix.changes import summarize_changes, summarize_culprits, summarize_for_start
from jenkins_matrix.types import AffectedFile, BuildRecord, ChangeEntry, Result


def _build(result: Optional[Result], *, culprits: List[str] = None,
           changes: Optional[List[ChangeEntry]] = None) -> BuildRecord:
    return BuildRecord(project="app", project_display_name="App", display_name="#7",
                       url="job/app/7/", result=result, culprits=culprits or [],
                       changes=changes)


def _files(count: int) -> List[AffectedFile]:
    return [AffectedFile(path=f"src/file{i}.py") for i in range(count)]


def test_start_summary_without_computed_change_set() -> None:
    assert summarize_for_start(None) is None


def test_start_summary_with_empty_change_set() -> None:
    assert summarize_for_start([]) is None


def test_start_summary_deduplicates_authors_and_files() -> None:
    f1 = AffectedFile(path="a.py")
    f2 = AffectedFile(path="b.py")
    changes = [
        ChangeEntry(author="alice", affected_files=[f1]),
        ChangeEntry(author="bob", affected_files=[f1, f2]),
        ChangeEntry(author="alice", affected_files=[f2]),
    ]
    assert (summarize_for_start(changes)
            == "Started by changes from alice, bob (2 file(s) changed)")


def test_start_summary_counts_files_by_identity() -> None:
    changes = [
        ChangeEntry(author="alice", affected_files=[AffectedFile(path="a.py")]),
        ChangeEntry(author="bob", affected_files=[AffectedFile(path="a.py")]),
    ]
    assert summarize_for_start(changes).endswith("(2 file(s) changed)")


def test_start_summary_entry_without_files() -> None:
    changes = [ChangeEntry(author="carol")]
    assert summarize_for_start(changes) == "Started by changes from carol (0 file(s) changed)"


def test_culprits_for_unstable_build() -> None:
    assert summarize_culprits(_build(Result.UNSTABLE, culprits=["carol"])) == (
        "<ol><li>carol</li></ol>")


def test_culprits_keep_order() -> None:
    fragment = summarize_culprits(_build(Result.FAILURE, culprits=["dave", "erin"]))
    assert fragment == "<ol><li>dave</li><li>erin</li></ol>"


@pytest.mark.parametrize("result", [Result.SUCCESS, Result.ABORTED, Result.NOT_BUILT, None])
def test_no_culprits_for_other_results(result) -> None:
    assert summarize_culprits(_build(result, culprits=["carol"])) is None


def test_no_empty_culprit_list() -> None:
    assert summarize_culprits(_build(Result.FAILURE)) is None


def test_culprits_are_escaped() -> None:
    fragment = summarize_culprits(_build(Result.FAILURE, culprits=["<script>"]))
    assert "<script>" not in fragment
    assert "&lt;script&gt;" in fragment


def test_changes_lists_files() -> None:
    changes = [ChangeEntry(author="alice", affected_files=_files(2))]
    assert summarize_changes(_build(Result.FAILURE, changes=changes)) == (
        "<ol><li>src/file0.py</li><li>src/file1.py</li></ol>")


def test_changes_truncates_after_max_files() -> None:
    changes = [ChangeEntry(author="alice", affected_files=_files(8)),
               ChangeEntry(author="bob", affected_files=_files(5))]
    fragment = summarize_changes(_build(Result.UNSTABLE, changes=changes))
    assert fragment.count("<li>") == 11
    assert fragment.endswith("<li>... and 3 more files</li></ol>")


def test_changes_exactly_max_files_has_no_trailer() -> None:
    changes = [ChangeEntry(author="alice", affected_files=_files(3))]
    fragment = summarize_changes(_build(Result.FAILURE, changes=changes), max_files=3)
    assert fragment.count("<li>") == 3
    assert "more files" not in fragment


@pytest.mark.parametrize("build", [
    _build(Result.SUCCESS, changes=[ChangeEntry(author="alice", affected_files=_files(1))]),
    _build(Result.FAILURE, changes=None),
    _build(Result.FAILURE, changes=[]),
    _build(Result.FAILURE, changes=[ChangeEntry(author="alice")]),
])
def test_no_changes_fragment(build) -> None:
    assert summarize_changes(build) is None
