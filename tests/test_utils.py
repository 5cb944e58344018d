"""Tests for language detection, ignore rules and line helpers."""

import pytest

from coderag.utils import detect_language, should_ignore, slice_lines, split_lines


class TestDetectLanguage:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("app.ts", "typescript"),
            ("App.tsx", "typescript"),
            ("index.js", "javascript"),
            ("Button.jsx", "javascript"),
            ("main.py", "python"),
            ("lib.rs", "rust"),
            ("server.go", "go"),
            ("Main.java", "java"),
            ("types.d.ts", "typescript"),
        ],
    )
    def test_known_extensions(self, filename: str, expected: str):
        assert detect_language(filename) == expected

    @pytest.mark.parametrize("filename", ["README.md", "Makefile", "style.css", "data.json", "main.pyc"])
    def test_unsupported(self, filename: str):
        assert detect_language(filename) is None

    def test_case_sensitive(self):
        assert detect_language("MAIN.PY") is None
        assert detect_language("App.TS") is None


class TestShouldIgnore:
    @pytest.mark.parametrize(
        "path",
        [
            "node_modules/react/index.js",
            "packages/web/node_modules/react/index.js",
            ".git/HEAD",
            "dist/bundle.js",
            "apps/site/build/main.js",
            "yarn.lock",
            "sub/Cargo.lock",
            "logs/server.log",
            "debug.log",
            "pkg/__pycache__/mod.py",
            ".venv/lib/site.py",
            "venv/bin/activate.py",
            "mypkg.egg-info/PKG-INFO",
            "package-lock.json",
        ],
    )
    def test_ignored(self, path: str):
        assert should_ignore(path)

    @pytest.mark.parametrize(
        "path",
        [
            "src/index.ts",
            "src/rebuild.ts",
            "lib/distance.py",
            "docs/logging.py",
            "src/builder/main.go",
            "src/env/config.ts",
            "src/out/x.ts",
        ],
    )
    def test_not_ignored(self, path: str):
        assert not should_ignore(path)

    def test_windows_separators(self):
        assert should_ignore("web\\node_modules\\react\\index.js")
        assert not should_ignore("src\\app\\main.ts")

    def test_directory_itself(self):
        assert should_ignore("node_modules")
        assert should_ignore("a/b/.git")

    def test_empty_path(self):
        assert not should_ignore("")


class TestLines:
    def test_split_keeps_terminators(self):
        assert split_lines("a\nb\n") == ["a\n", "b\n"]

    def test_split_without_trailing_newline(self):
        assert split_lines("a\nb") == ["a\n", "b"]

    def test_split_empty(self):
        assert split_lines("") == []

    def test_split_blank_lines(self):
        assert split_lines("\n\n") == ["\n", "\n"]

    def test_slice_is_inclusive(self):
        text = "one\ntwo\nthree\nfour\n"
        assert slice_lines(text, 2, 3) == "two\nthree\n"
        assert slice_lines(text, 1, 4) == text

    def test_carriage_returns_stay_in_line(self):
        text = "a\r\nb\r\n"
        assert split_lines(text) == ["a\r\n", "b\r\n"]
