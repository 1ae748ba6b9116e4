"""Tests for burrow.discovery — pages roots and component files."""

from __future__ import annotations

from pathlib import Path

from burrow.discovery import GLOBAL_SCOPE, PagesDirInfo, get_page_files, get_pages_dirs
from tests.conftest import write_pages


class TestGetPagesDirs:
    def test_global_then_entrypoints(self, project: Path) -> None:
        infos = get_pages_dirs(project / "src")

        assert [info.scope for info in infos] == [GLOBAL_SCOPE, "popup"]
        assert infos[0].path == project / "src" / "pages"
        assert infos[1].path == project / "src" / "entrypoints" / "popup" / "pages"

    def test_entrypoints_in_name_order(self, tmp_path: Path) -> None:
        for name in ("options", "background", "popup"):
            write_pages(tmp_path / "entrypoints" / name / "pages", ["index.vue"])

        infos = get_pages_dirs(tmp_path)
        assert [info.scope for info in infos] == ["background", "options", "popup"]

    def test_entrypoint_without_pages_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "entrypoints" / "content").mkdir(parents=True)
        write_pages(tmp_path / "pages", ["index.vue"])

        assert [info.scope for info in get_pages_dirs(tmp_path)] == [GLOBAL_SCOPE]

    def test_missing_source_dir(self, tmp_path: Path) -> None:
        assert get_pages_dirs(tmp_path / "nope") == ()

    def test_paths_are_absolute(self, project: Path, monkeypatch) -> None:
        monkeypatch.chdir(project)
        (info, _popup) = get_pages_dirs("src")
        assert info.path.is_absolute()

    def test_info_is_frozen(self) -> None:
        info = PagesDirInfo(scope="global", path=Path("/x"))
        assert info == PagesDirInfo(scope="global", path=Path("/x"))
        assert isinstance(hash(info), int)


class TestGetPageFiles:
    def test_recursive_in_name_order(self, tmp_path: Path) -> None:
        write_pages(tmp_path, ["users/[id].vue", "index.vue", "about.vue", "users/index.vue"])

        files = get_page_files(tmp_path, (".vue",))
        rel = [Path(f).relative_to(tmp_path).as_posix() for f in files]
        assert rel == ["about.vue", "index.vue", "users/[id].vue", "users/index.vue"]

    def test_filters_extensions(self, tmp_path: Path) -> None:
        write_pages(tmp_path, ["a.vue", "b.tsx", "c.md"])

        files = get_page_files(tmp_path, (".vue", ".tsx"))
        assert [Path(f).name for f in files] == ["a.vue", "b.tsx"]

    def test_hidden_entries_skipped(self, tmp_path: Path) -> None:
        write_pages(tmp_path, [".draft.vue", ".cache/x.vue", "page.vue"])

        assert [Path(f).name for f in get_page_files(tmp_path, (".vue",))] == ["page.vue"]

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert get_page_files(tmp_path / "missing", (".vue",)) == []

    def test_returns_absolute_strings(self, tmp_path: Path) -> None:
        write_pages(tmp_path, ["index.vue"])
        (path,) = get_page_files(tmp_path, (".vue",))
        assert isinstance(path, str)
        assert path == str(tmp_path / "index.vue")
