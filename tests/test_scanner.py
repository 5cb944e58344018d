"""Tests for the repository scanner."""

from pathlib import Path

import pytest

from coderag.ingesters import MAX_FILE_SIZE, RepositoryScanner, scan_repository
from coderag.models import ScannedFile


class TestScanRepository:
    def test_finds_supported_files(self, project: Path):
        files = scan_repository(project)
        paths = {f.path for f in files}
        assert paths == {"main.go", "src/config.py", "src/math.ts"}

    def test_file_fields(self, project: Path):
        files = {f.path: f for f in scan_repository(project)}
        config = files["src/config.py"]
        assert isinstance(config, ScannedFile)
        assert config.language == "python"
        assert config.content == (project / "src" / "config.py").read_text()
        assert config.size == (project / "src" / "config.py").stat().st_size

    def test_paths_use_forward_slashes(self, project: Path):
        for f in scan_repository(project):
            assert "\\" not in f.path
            assert not f.path.startswith("/")

    def test_paths_unique(self, project: Path):
        paths = [f.path for f in scan_repository(project)]
        assert len(paths) == len(set(paths))

    def test_skips_unsupported_extensions(self, tmp_path: Path):
        (tmp_path / "README.md").write_text("# readme")
        (tmp_path / "app.py").write_text("x = 1\n")
        assert [f.path for f in scan_repository(tmp_path)] == ["app.py"]

    def test_skips_large_files(self, tmp_path: Path):
        (tmp_path / "big.py").write_text("x" * (MAX_FILE_SIZE + 1))
        (tmp_path / "edge.py").write_text("y" * MAX_FILE_SIZE)
        assert [f.path for f in scan_repository(tmp_path)] == ["edge.py"]

    def test_prunes_ignored_directories(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "node_modules" / "deep").mkdir(parents=True)
        (tmp_path / "node_modules" / "deep" / "a.js").write_text("function a() {}\n")
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "b.js").write_text("function b() {}\n")

        import coderag.ingesters.repository as repository

        visited = []
        real_walk = repository.os.walk

        def recording_walk(top, *args, **kwargs):
            for root, dirnames, filenames in real_walk(top, *args, **kwargs):
                visited.append(Path(root).name)
                yield root, dirnames, filenames

        monkeypatch.setattr(repository.os, "walk", recording_walk)

        files = scan_repository(tmp_path)
        assert [f.path for f in files] == ["src/b.js"]
        assert "node_modules" not in visited
        assert "deep" not in visited

    def test_unreadable_file_is_skipped(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "ok.py").write_text("a = 1\n")
        (tmp_path / "broken.py").write_text("b = 2\n")

        real_read_bytes = Path.read_bytes

        def flaky_read_bytes(self):
            if self.name == "broken.py":
                raise PermissionError("denied")
            return real_read_bytes(self)

        monkeypatch.setattr(Path, "read_bytes", flaky_read_bytes)

        assert [f.path for f in scan_repository(tmp_path)] == ["ok.py"]

    def test_invalid_utf8_is_replaced(self, tmp_path: Path):
        (tmp_path / "latin.py").write_bytes(b"name = '\xff'\n")
        [scanned] = scan_repository(tmp_path)
        assert "�" in scanned.content

    def test_empty_directory(self, tmp_path: Path):
        assert scan_repository(tmp_path) == []


class TestRepositoryScanner:
    def test_can_handle_directory(self, tmp_path: Path):
        scanner = RepositoryScanner()
        assert scanner.can_handle(tmp_path)
        assert not scanner.can_handle(tmp_path / "missing")

    def test_custom_size_limit(self, tmp_path: Path):
        (tmp_path / "a.py").write_text("x" * 20)
        assert RepositoryScanner(max_file_size=10).scan(tmp_path) == []
