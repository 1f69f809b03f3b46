"""
Forensic CLI Tests

Runs `semlog.forensic.main` in-process against documents written to a
temporary log directory.
"""

import json
import os

import pytest

from semlog.forensic import main
from tests.fixtures import NESTED_DOCUMENT


def write_log(directory, name, document, mtime):
    path = directory / name
    path.write_text(json.dumps(document), encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def log_dir(tmp_path):
    write_log(tmp_path, "semantic-log-old.json", {"open": {"id": "old_1", "kind": "old"}}, 1_000_000)
    write_log(tmp_path, "semantic-log-new.json", NESTED_DOCUMENT, 2_000_000)
    write_log(tmp_path, "unrelated.json", {}, 3_000_000)
    return tmp_path


class TestTreeCommand:

    def test_text_tree(self, tmp_path, capsys):
        path = write_log(tmp_path, "trace.json", NESTED_DOCUMENT, 1_000_000)

        assert main(["tree", str(path)]) == 0

        out = capsys.readouterr().out
        assert "└── http_request::GET /api/users [150.0ms]" in out
        assert "cache_operation [...]" in out

    def test_options(self, tmp_path, capsys):
        path = write_log(tmp_path, "trace.json", NESTED_DOCUMENT, 1_000_000)

        assert main(["tree", str(path), "--depth=5", "-t", "10ms", "-e", "error"]) == 0

        out = capsys.readouterr().out
        assert "database_query::SELECT users" in out
        assert "cache_operation" not in out
        assert "error" not in out

    def test_html(self, tmp_path, capsys):
        path = write_log(tmp_path, "trace.json", NESTED_DOCUMENT, 1_000_000)

        assert main(["tree", str(path), "--format", "html"]) == 0

        assert "<title>Semantic Tree Visualization</title>" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["tree", str(tmp_path / "missing.json")]) == 1
        assert "Error: Log file not found" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        assert main(["tree", str(path)]) == 1
        assert "Error: Invalid log data" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"open": {"id": "\xff\xfe"}}')

        assert main(["tree", str(path)]) == 1
        assert "Error: Invalid log data" in capsys.readouterr().err

    def test_document_without_open(self, tmp_path, capsys):
        path = write_log(tmp_path, "trace.json", {"close": {}}, 1_000_000)

        assert main(["tree", str(path)]) == 1
        assert "missing open section" in capsys.readouterr().err

    def test_bad_threshold_is_usage_error(self, tmp_path):
        path = write_log(tmp_path, "trace.json", NESTED_DOCUMENT, 1_000_000)
        with pytest.raises(SystemExit) as exc_info:
            main(["tree", str(path), "--threshold", "soon"])
        assert exc_info.value.code == 2


class TestListAndShow:

    def test_list_newest_first(self, log_dir, capsys):
        assert main(["list", "--log-dir", str(log_dir)]) == 0

        out = capsys.readouterr().out
        assert "unrelated.json" not in out
        assert out.index("semantic-log-new.json") < out.index("semantic-log-old.json")

    def test_list_uses_environment(self, log_dir, capsys, monkeypatch):
        monkeypatch.setenv("SEMLOG_LOG_DIR", str(log_dir))
        assert main(["list"]) == 0
        assert "semantic-log-new.json" in capsys.readouterr().out

    def test_list_empty_directory(self, tmp_path, capsys):
        assert main(["list", "--log-dir", str(tmp_path)]) == 0
        assert "No semantic log files found" in capsys.readouterr().out

    def test_list_missing_directory(self, tmp_path, capsys):
        assert main(["list", "--log-dir", str(tmp_path / "nowhere")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_show_newest(self, log_dir, capsys):
        assert main(["show", "--log-dir", str(log_dir)]) == 0

        out = capsys.readouterr().out
        assert out.startswith("# semantic-log-new.json")
        assert '"id": "http_request_1"' in out

    def test_show_index(self, log_dir, capsys):
        assert main(["show", "--log-dir", str(log_dir), "--index", "2"]) == 0
        assert '"id": "old_1"' in capsys.readouterr().out

    def test_show_index_out_of_range(self, log_dir, capsys):
        assert main(["show", "--log-dir", str(log_dir), "--index", "3"]) == 1
        assert "out of range" in capsys.readouterr().err


class TestDemoCommand:

    def test_prints_document(self, capsys):
        assert main(["demo"]) == 0

        document = json.loads(capsys.readouterr().out)
        assert document["open"]["id"] == "http_request_1"

    def test_writes_file_viewable_by_tree(self, tmp_path, capsys):
        output = tmp_path / "semantic-log-demo.json"

        assert main(["demo", "-o", str(output)]) == 0
        assert main(["tree", str(output), "--full"]) == 0

        out = capsys.readouterr().out
        assert "http_request::POST /api/orders" in out
        assert "database_query::INSERT orders" in out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: semlog" in capsys.readouterr().out
