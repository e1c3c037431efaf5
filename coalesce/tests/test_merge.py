import re
from pathlib import Path

import pytest

from coalesce.core.merge import DirectoryMerger
from coalesce.core.options import AppOptions


@pytest.fixture
def workdir(source_tree: Path, monkeypatch) -> Path:
    root = source_tree.resolve()
    monkeypatch.chdir(root)
    return root


def options_for(root: Path, **kwargs) -> AppOptions:
    kwargs.setdefault("output_file_path", str(root / "out" / "merged.md"))
    kwargs.setdefault("source_directory_paths", [str(root / "src")])
    return AppOptions(**kwargs)


def test_write_produces_one_section_per_file(workdir, diagnostics):
    options = options_for(workdir, include_extensions=[".cs", ".txt"])

    summary = DirectoryMerger(options, diagnostics).merge()

    assert summary.ok
    assert (summary.processed, summary.skipped) == (2, 0)
    text = (workdir / "out" / "merged.md").read_text(encoding="utf-8")
    assert re.findall(r"^### `(.+)`$", text, flags=re.M) == ["src/file1.cs", "src/file2.txt"]
    assert "```csharp\npublic class Test {}\n```" in text
    assert "```text\nsome text\n```" in text
    assert text.count("\n---\n") == 2
    assert any("Merging complete. Processed 2 files across 1 source directories." in m
               for m in diagnostics.messages("success"))


def test_dry_run_does_not_create_output(workdir, diagnostics):
    options = options_for(workdir)

    summary = DirectoryMerger(options, diagnostics, dry_run=True).merge()

    assert summary.ok and summary.dry_run
    assert summary.processed == 2
    assert not (workdir / "out" / "merged.md").exists()
    previews = [
        m for m in diagnostics.messages("info")
        if m.startswith("- ") and not m.startswith("- Added Source Directory")
    ]
    assert previews == [f"- {workdir / 'src' / 'file1.cs'}", f"- {workdir / 'src' / 'file2.txt'}"]
    assert "Dry run complete. Found 2 files to include." in diagnostics.messages("success")


def test_dry_run_keeps_existing_output(workdir, diagnostics):
    out = workdir / "out" / "merged.md"
    out.write_text("previous", encoding="utf-8")

    DirectoryMerger(options_for(workdir), diagnostics, dry_run=True).merge()

    assert out.read_text(encoding="utf-8") == "previous"


def test_existing_output_is_replaced(workdir, diagnostics):
    out = workdir / "out" / "merged.md"
    out.write_text("stale content", encoding="utf-8")

    DirectoryMerger(options_for(workdir), diagnostics).merge()

    assert "stale content" not in out.read_text(encoding="utf-8")
    assert any("Deleted existing output file" in m for m in diagnostics.messages("info"))


def test_output_inside_source_is_not_merged_into_itself(workdir, diagnostics):
    options = options_for(workdir, output_file_path=str(workdir / "src" / "merged.md"))

    summary = DirectoryMerger(options, diagnostics).merge()

    assert summary.processed == 2
    text = (workdir / "src" / "merged.md").read_text(encoding="utf-8")
    assert "merged.md`" not in text


def test_no_eligible_files_is_a_warning(workdir, diagnostics):
    options = options_for(workdir, include_extensions=[".py"])

    summary = DirectoryMerger(options, diagnostics).merge()

    assert summary.ok
    assert summary.processed == 0
    assert "No eligible files were found in the provided source directories." in diagnostics.messages("warning")


def test_unreadable_file_is_skipped(workdir, monkeypatch, diagnostics):
    from coalesce.core import merge as merge_mod

    real_provider = merge_mod.SourceFileProvider

    class WithGhost(real_provider):
        def iter_eligible_files(self, source_directory):
            yield from super().iter_eligible_files(source_directory)
            yield str(Path(source_directory) / "vanished.cs")

    monkeypatch.setattr(merge_mod, "SourceFileProvider", WithGhost)

    summary = DirectoryMerger(options_for(workdir), diagnostics).merge()

    assert summary.ok
    assert (summary.processed, summary.skipped) == (2, 1)
    assert any("vanished.cs" in m for m in diagnostics.messages("warning"))
    assert "Skipped 1 files (unreadable, excluded, or output file itself)." in diagnostics.messages("info")


def test_output_that_cannot_be_opened_aborts_write(workdir, diagnostics):
    # a directory where the output file should go
    (workdir / "out" / "merged.md").mkdir()

    summary = DirectoryMerger(options_for(workdir), diagnostics).merge()

    assert not summary.ok
    assert summary.error == "OutputOpenError"
    assert summary.processed == 0
    assert any("Could not open output file" in m for m in diagnostics.messages("error"))


def test_missing_output_directory_is_fatal(workdir, diagnostics):
    options = options_for(workdir, output_file_path=str(workdir / "nowhere" / "merged.md"))

    summary = DirectoryMerger(options, diagnostics).merge()

    assert summary.error == "PathResolutionError"
    assert diagnostics.has("suggestion")
    assert not (workdir / "nowhere").exists()


def test_no_valid_sources_is_fatal(workdir, diagnostics):
    options = options_for(workdir, source_directory_paths=[str(workdir / "missing")])

    summary = DirectoryMerger(options, diagnostics).merge()

    assert summary.error == "NoValidSourceDirectories"
    assert "No valid source directories were provided or found." in diagnostics.messages("error")


def test_multiple_sources_in_configured_order(workdir, diagnostics):
    (workdir / "docs").mkdir()
    (workdir / "docs" / "readme.md").write_text("# hi", encoding="utf-8")
    options = options_for(
        workdir,
        source_directory_paths=[str(workdir / "docs"), str(workdir / "src")],
    )

    summary = DirectoryMerger(options, diagnostics).merge()

    assert summary.source_count == 2
    text = (workdir / "out" / "merged.md").read_text(encoding="utf-8")
    assert re.findall(r"^### `(.+)`$", text, flags=re.M) == [
        "docs/readme.md", "src/file1.cs", "src/file2.txt",
    ]


def test_output_write_failure_ends_the_run(workdir, monkeypatch, diagnostics):
    import io
    from coalesce.core import merge as merge_mod

    class FullDisk(io.StringIO):
        def write(self, s):
            raise OSError(28, "No space left on device")

    monkeypatch.setattr(merge_mod, "open", lambda *a, **kw: FullDisk(), raising=False)

    summary = DirectoryMerger(options_for(workdir), diagnostics).merge()

    assert not summary.ok
    assert summary.error == "OutputWriteError"
    assert summary.skipped == 0
    assert any("Could not write to output file" in m for m in diagnostics.messages("error"))
    assert not diagnostics.has("success")


def test_failed_delete_of_existing_output_is_only_a_warning(workdir, monkeypatch, diagnostics):
    out = workdir / "out" / "merged.md"
    out.write_text("stale content", encoding="utf-8")

    def locked(path):
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr("coalesce.core.merge.os.remove", locked)

    summary = DirectoryMerger(options_for(workdir), diagnostics).merge()

    assert summary.ok
    assert summary.processed == 2
    assert any("Could not delete existing file" in m for m in diagnostics.messages("warning"))
    assert "stale content" not in out.read_text(encoding="utf-8")
