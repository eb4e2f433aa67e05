"""Tests for scan target resolution and zip extraction."""

import zipfile

import pytest

from archive import (
    ScanTarget,
    TargetNotFoundError,
    extract_zip,
    is_zip_file,
    pick_project_root,
    prepare_target,
)


def _make_zip(path, members: dict[str, str]):
    """Helper: write a zip with {name: content}; names ending in '/' are directories."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


class TestIsZipFile:
    def test_suffix_case_insensitive(self):
        assert is_zip_file("project.zip")
        assert is_zip_file("/tmp/PROJECT.ZIP")

    def test_other_paths(self):
        assert not is_zip_file("project")
        assert not is_zip_file("project.zip.bak")


class TestPickProjectRoot:
    def test_single_wrapped_folder(self, tmp_path):
        (tmp_path / "my-app").mkdir()
        assert pick_project_root(tmp_path) == tmp_path / "my-app"

    def test_macosx_metadata_ignored(self, tmp_path):
        (tmp_path / "my-app").mkdir()
        (tmp_path / "__MACOSX").mkdir()
        assert pick_project_root(tmp_path) == tmp_path / "my-app"

    def test_multiple_entries_use_extraction_root(self, tmp_path):
        (tmp_path / "app").mkdir()
        (tmp_path / "package.json").write_text("{}")
        assert pick_project_root(tmp_path) == tmp_path

    def test_single_file_uses_extraction_root(self, tmp_path):
        (tmp_path / "index.js").write_text("")
        assert pick_project_root(tmp_path) == tmp_path

    def test_empty_single_folder_still_chosen(self, tmp_path):
        (tmp_path / "empty").mkdir()
        assert pick_project_root(tmp_path) == tmp_path / "empty"

    def test_hidden_entry_counts(self, tmp_path):
        (tmp_path / "my-app").mkdir()
        (tmp_path / ".DS_Store").write_text("")
        assert pick_project_root(tmp_path) == tmp_path


class TestExtractZip:
    def test_rejects_path_traversal(self, tmp_path):
        archive = _make_zip(tmp_path / "evil.zip", {"../escape.js": "x"})
        dest = tmp_path / "out"
        dest.mkdir()
        with pytest.raises(ValueError, match="Unsafe path"):
            extract_zip(archive, dest)
        assert not (tmp_path / "escape.js").exists()


class TestPrepareTarget:
    def test_directory_target(self, tmp_path):
        with prepare_target(tmp_path) as target:
            assert target == ScanTarget(root=tmp_path.resolve(), display=str(tmp_path.resolve()))

    def test_missing_target(self, tmp_path):
        with pytest.raises(TargetNotFoundError) as exc_info:
            with prepare_target(tmp_path / "nope"):
                pass
        assert exc_info.value.path == (tmp_path / "nope").resolve()
        assert "Target not found" in str(exc_info.value)

    def test_zip_with_wrapped_folder(self, tmp_path):
        archive = _make_zip(tmp_path / "site.zip", {
            "site/app/page.tsx": "process.env.X",
            "__MACOSX/site/._page.tsx": "",
        })
        with prepare_target(archive) as target:
            assert target.root.name == "site"
            assert (target.root / "app" / "page.tsx").read_text() == "process.env.X"
            assert target.display == str(archive.resolve())
            extracted = target.root.parent
        assert not extracted.exists()

    def test_zip_without_wrapper(self, tmp_path):
        archive = _make_zip(tmp_path / "flat.zip", {"a.ts": "", "b.ts": ""})
        with prepare_target(archive) as target:
            assert sorted(p.name for p in target.root.iterdir()) == ["a.ts", "b.ts"]
            extracted = target.root
        assert not extracted.exists()

    def test_temp_dir_removed_on_error(self, tmp_path):
        archive = _make_zip(tmp_path / "site.zip", {"site/a.ts": ""})
        seen = {}
        with pytest.raises(RuntimeError):
            with prepare_target(archive) as target:
                seen["root"] = target.root
                raise RuntimeError("boom")
        assert not seen["root"].exists()

    def test_bad_zip_propagates(self, tmp_path):
        archive = tmp_path / "broken.zip"
        archive.write_text("not a zip")
        with pytest.raises(zipfile.BadZipFile):
            with prepare_target(archive):
                pass
