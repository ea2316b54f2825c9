import os
import sys

from dashboard import server


def test_build_command():
    command = server.build_command('/app/ui.py', port=8600)
    assert command == [sys.executable, '-m', 'streamlit', 'run', '/app/ui.py', '--server.port', '8600']


def test_build_command_default_port():
    assert server.build_command('/app/ui.py')[-1] == '/app/ui.py'


def test_build_environment_points_at_data_dir(tmp_path):
    env = server.build_environment(str(tmp_path))
    assert env['AIRTRAFFIC_DATA_DIR'] == os.path.abspath(str(tmp_path))


def test_run_dashboard_reports_failure(monkeypatch):
    def fail(command, check, env):
        raise server.subprocess.CalledProcessError(3, command)

    monkeypatch.setattr(server.subprocess, 'run', fail)
    assert server.run_dashboard() == 3


def test_ui_script_is_bundled():
    assert os.path.exists(server.UI_PATH)
