import sys

import pytest

from jote.editor import SubprocessEditor


def test_path_is_appended_after_base_arguments(tmp_path):
    note = tmp_path / "n.md"
    note.write_text("", encoding="utf-8")
    editor = SubprocessEditor(
        [sys.executable, "-c", "import sys; open(sys.argv[1], 'a').write('edited')"]
    )

    assert editor(note) == 0
    assert note.read_text(encoding="utf-8") == "edited"


def test_exit_status_is_returned(tmp_path):
    editor = SubprocessEditor([sys.executable, "-c", "import sys; sys.exit(3)"])

    assert editor(tmp_path / "n.md") == 3


def test_missing_executable_raises_oserror(tmp_path):
    editor = SubprocessEditor(["jote-no-such-editor-binary"])

    with pytest.raises(OSError):
        editor(tmp_path / "n.md")


def test_empty_command_is_rejected():
    with pytest.raises(ValueError):
        SubprocessEditor([])
