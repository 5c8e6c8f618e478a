import logging
import subprocess

import pytest

from images2spritesheet.core.errors import CollaboratorError
from images2spritesheet.utils import file_tools


def test_save_text_file_writes_contents(tmp_path):
    path = file_tools.save_text_file(".a {}", tmp_path / "css", "icons.css")
    assert path.read_text(encoding="utf-8") == ".a {}"


def test_save_text_file_into_a_file_path_is_a_save_error(tmp_path):
    blocker = tmp_path / "taken"
    blocker.write_text("not a folder")
    with pytest.raises(CollaboratorError) as excinfo:
        file_tools.save_text_file(".a {}", blocker)
    assert excinfo.value.operation == "save"


def test_open_folder_waits_for_launcher(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(file_tools.sys, "platform", "linux")
    monkeypatch.setattr(file_tools.subprocess, "run", lambda cmd, **kwargs: calls.append((cmd, kwargs)))
    file_tools.open_folder(tmp_path)
    assert calls == [(["xdg-open", str(tmp_path)], {"check": True, "timeout": file_tools.OPEN_FOLDER_TIMEOUT})]


def test_open_folder_failure_is_logged(tmp_path, monkeypatch, caplog):
    def fail(cmd, **kwargs):
        raise subprocess.CalledProcessError(3, cmd)

    monkeypatch.setattr(file_tools.sys, "platform", "linux")
    monkeypatch.setattr(file_tools.subprocess, "run", fail)
    with caplog.at_level(logging.WARNING, logger=file_tools.logger.name):
        file_tools.open_folder(tmp_path)
    assert "Could not open output folder" in caplog.text
