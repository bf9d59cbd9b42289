"""
Launcher tests. Streamlit itself is never started.
"""
import subprocess
import sys
import os
from pathlib import Path

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from program_estimator.ui import run


class FakeCompleted:
    returncode = 0


def test_main_runs_streamlit_on_the_form(monkeypatch):
    calls = []

    def fake_run(cmd):
        calls.append(cmd)
        return FakeCompleted()

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert run.main(["--server.port", "8600"]) == 0
    assert len(calls) == 1
    cmd = calls[0]
    assert cmd[:4] == [sys.executable, "-m", "streamlit", "run"]
    assert Path(cmd[4]).name == "app_streamlit.py"
    assert Path(cmd[4]).is_file()
    assert cmd[5:] == ["--server.port", "8600"]


def test_main_passes_through_exit_code(monkeypatch):
    class Failed:
        returncode = 2

    monkeypatch.setattr(subprocess, "run", lambda cmd: Failed())
    assert run.main([]) == 2


def test_streamlit_command_without_extra_args():
    assert run.streamlit_command("app.py") == [sys.executable, "-m", "streamlit", "run", "app.py"]
