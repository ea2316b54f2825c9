import argparse
import logging
import os
import subprocess
import sys

from airtraffic.config import configure_logging

logger = logging.getLogger(__name__)

UI_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "ui.py")


def build_command(ui_path: str = UI_PATH, port: int = None) -> list:
    """Streamlit command line for the dashboard script."""
    command = [sys.executable, "-m", "streamlit", "run", ui_path]
    if port is not None:
        command += ["--server.port", str(port)]
    return command


def build_environment(data_dir: str = None) -> dict:
    """Process environment for the dashboard; `data_dir` overrides AIRTRAFFIC_DATA_DIR."""
    env = os.environ.copy()
    if data_dir:
        env["AIRTRAFFIC_DATA_DIR"] = os.path.abspath(data_dir)
    return env


def run_dashboard(data_dir: str = None, port: int = None) -> int:
    """
    Runs the Streamlit dashboard in a child process.

    Returns:
        The child's exit status, or 1 if it could not be started.
    """
    if not os.path.exists(UI_PATH):
        logger.error("ui.py not found at %s", UI_PATH)
        return 1

    logger.info("Launching Streamlit dashboard from: %s", UI_PATH)
    try:
        subprocess.run(build_command(UI_PATH, port), check=True, env=build_environment(data_dir))
    except FileNotFoundError:
        logger.error("Python interpreter not found; is 'streamlit' installed ('pip install streamlit')?")
        return 1
    except subprocess.CalledProcessError as e:
        logger.error("An error occurred while running the Streamlit app: %s", e)
        return e.returncode
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Launch the air traffic dashboard')
    parser.add_argument('--data-dir', help='Directory holding 2008.csv, carriers.csv and airports.csv')
    parser.add_argument('--port', type=int, help='Port to serve on')
    args = parser.parse_args(argv)

    configure_logging()
    return run_dashboard(args.data_dir, args.port)


if __name__ == "__main__":
    sys.exit(main())
