"""Tests for the git output parsers."""

from mcp_git_tools.git.parsers import (
    FS,
    RS,
    parse_change_summary,
    parse_commit,
    parse_merge,
    parse_numstat,
    parse_stash_list,
    parse_status,
)

SHA_A = "a" * 40
SHA_B = "b" * 40


class TestParseStatus:
    def test_clean_with_tracking(self):
        status = parse_status("## main...origin/main\0")

        assert status.current == "main"
        assert status.tracking == "origin/main"
        assert status.ahead == 0
        assert status.behind == 0
        assert status.is_clean()

    def test_ahead_behind(self):
        status = parse_status("## feature...origin/feature [ahead 2, behind 3]\0")

        assert status.current == "feature"
        assert status.ahead == 2
        assert status.behind == 3

    def test_no_upstream(self):
        status = parse_status("## main\0")

        assert status.current == "main"
        assert status.tracking is None

    def test_detached_head(self):
        status = parse_status("## HEAD (no branch)\0")

        assert status.current is None
        assert status.tracking is None

    def test_unborn_branch(self):
        status = parse_status("## No commits yet on main\0?? README.md\0")

        assert status.current == "main"
        assert status.not_added == ["README.md"]

    def test_file_categories(self):
        output = "\0".join(
            [
                "## main",
                " M modified.py",
                "M  staged_modified.py",
                "A  added.py",
                " D deleted.py",
                "UU conflict.py",
                "?? untracked.py",
                "",
            ]
        )

        status = parse_status(output)

        assert status.modified == ["modified.py", "staged_modified.py"]
        assert status.created == ["added.py"]
        assert status.deleted == ["deleted.py"]
        assert status.conflicted == ["conflict.py"]
        assert status.not_added == ["untracked.py"]
        assert status.staged == ["staged_modified.py", "added.py"]
        assert len(status.files) == 6
        assert not status.is_clean()

    def test_rename_consumes_original_path(self):
        status = parse_status("## main\0R  new.py\0old.py\0 M other.py\0")

        assert [str(r) for r in status.renamed] == ["old.py -> new.py"]
        assert status.staged == ["new.py"]
        assert [f.path for f in status.files] == ["new.py", "other.py"]

    def test_paths_with_spaces(self):
        status = parse_status("## main\0 M dir/my file.txt\0")

        assert status.modified == ["dir/my file.txt"]


class TestParseCommitAndMerge:
    def test_change_summary(self):
        summary = parse_change_summary(" 3 files changed, 10 insertions(+), 2 deletions(-)")

        assert (summary.changes, summary.insertions, summary.deletions) == (3, 10, 2)

    def test_change_summary_single_file_no_deletions(self):
        summary = parse_change_summary(" 1 file changed, 1 insertion(+)")

        assert (summary.changes, summary.insertions, summary.deletions) == (1, 1, 0)

    def test_change_summary_missing(self):
        assert parse_change_summary("Already up to date.").changes == 0

    def test_commit(self):
        output = "[main 1a2b3c4] Add feature\n 1 file changed, 1 insertion(+)\n"

        result = parse_commit(output)

        assert result.commit == "1a2b3c4"
        assert result.branch == "main"
        assert result.summary.insertions == 1

    def test_root_commit(self):
        output = "[main (root-commit) 1a2b3c4] Initial commit\n 1 file changed, 1 insertion(+)\n"

        result = parse_commit(output)

        assert result.commit == "1a2b3c4"
        assert result.branch == "main"

    def test_commit_with_author_line(self):
        output = "[main 1a2b3c4] Amended\n Author: Jane Doe <jane@example.com>\n 1 file changed\n"

        assert parse_commit(output).author == "Jane Doe <jane@example.com>"

    def test_merge_clean(self):
        output = (
            "Auto-merging shared.py\n"
            "Merge made by the 'ort' strategy.\n"
            " shared.py | 2 +-\n"
            " 1 file changed, 1 insertion(+), 1 deletion(-)\n"
        )

        result = parse_merge(output)

        assert result.result == "success"
        assert result.merges == ["shared.py"]
        assert result.conflicts == []
        assert result.summary.deletions == 1

    def test_merge_conflicts(self):
        output = (
            "Auto-merging shared.py\n"
            "CONFLICT (content): Merge conflict in shared.py\n"
            "Automatic merge failed; fix conflicts and then commit the result.\n"
        )

        result = parse_merge(output)

        assert result.result == "conflicts"
        assert result.conflicts == ["shared.py"]


class TestParseNumstat:
    def test_counts(self):
        summary = parse_numstat("3\t1\tsrc/a.py\n0\t4\tsrc/b.py\n")

        assert summary.changed == 2
        assert summary.insertions == 3
        assert summary.deletions == 5
        assert summary.files[0].changes == 4

    def test_binary(self):
        summary = parse_numstat("-\t-\timage.png\n")

        assert summary.files[0].binary is True
        assert summary.insertions == 0
        assert summary.changed == 1

    def test_empty(self):
        assert parse_numstat("").changed == 0


class TestParseStashList:
    def test_entries_are_indexed_in_order(self):
        output = (
            f"{SHA_B}{FS}2024-01-02T00:00:00+00:00{FS}On main: second{RS}\n"
            f"{SHA_A}{FS}2024-01-01T00:00:00+00:00{FS}WIP on main: first{RS}\n"
        )

        stashes = parse_stash_list(output)

        assert stashes.total == 2
        assert [s.index for s in stashes.all] == [0, 1]
        assert stashes.latest.message == "On main: second"
