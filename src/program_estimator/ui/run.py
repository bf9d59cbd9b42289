"""
Launch the Streamlit estimate form.

Usage:
    program-estimator [streamlit options]
"""
import logging
import subprocess
import sys
from importlib import resources

logger = logging.getLogger(__name__)

APP_MODULE = "app_streamlit.py"


def streamlit_command(app_path, extra_args=()):
    """Command line that serves the form with the current interpreter's Streamlit."""
    return [sys.executable, "-m", "streamlit", "run", str(app_path), *extra_args]


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    app = resources.files("program_estimator") / "ui" / APP_MODULE

    with resources.as_file(app) as app_path:
        if not app_path.exists():
            logger.error("Estimate form not found at %s", app_path)
            return 1
        cmd = streamlit_command(app_path, args)
        logger.info("Starting Streamlit: %s", " ".join(cmd))
        try:
            return subprocess.run(cmd).returncode
        except KeyboardInterrupt:
            return 0


if __name__ == "__main__":
    sys.exit(main())
