"""Seka School Portal entry point.

RUN_MODE=integrated (default) serves the API and the dashboard from one
uvicorn process. RUN_MODE=separate starts the API and the NiceGUI dashboard
as two child processes, with the dashboard streaming through the API.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logger = logging.getLogger(__name__)

UI_PORT = 8080
TRUTHY = {"1", "true", "yes", "on"}


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def reload_enabled() -> bool:
    """Whether API_RELOAD asks uvicorn to watch for code changes."""
    return os.getenv("API_RELOAD", "").strip().lower() in TRUTHY


def api_command(host: str, port: str, reload: bool = False) -> list[str]:
    """Build the argv that runs the API under uvicorn in a child process."""
    command = [
        sys.executable,
        "-m",
        "uvicorn",
        "seka_portal.api.app:app",
        "--host",
        host,
        "--port",
        port,
    ]
    if reload:
        command.append("--reload")
    return command


def dashboard_env(api_port: str) -> dict[str, str]:
    """Environment for the dashboard process, pointing it at the API unless overridden."""
    env = dict(os.environ)
    env.setdefault("API_BASE_URL", f"http://localhost:{api_port}")
    return env


def run_integrated() -> None:
    import uvicorn
    from nicegui import ui

    from seka_portal.api.app import create_app
    from seka_portal.ui.dashboard_page import dashboard_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="Seka School Portal",
        favicon="🏫",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "seka-portal-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Serving dashboard and API on http://localhost:{port} (docs at /docs)")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    import asyncio
    import subprocess

    api_port = os.getenv("PORT", "8000")
    reload = reload_enabled()

    async def supervise() -> None:
        logger.info(f"Starting API on http://localhost:{api_port} (reload={reload})")
        logger.info(f"Starting dashboard on http://localhost:{UI_PORT}")

        processes = [
            subprocess.Popen(api_command(os.getenv("HOST", "0.0.0.0"), api_port, reload)),
            subprocess.Popen(
                [sys.executable, "-c", "from seka_portal.ui.dashboard_page import main; main()"],
                env=dashboard_env(api_port),
            ),
        ]

        try:
            # Stop both as soon as either exits
            while all(process.poll() is None for process in processes):
                await asyncio.sleep(1)
        finally:
            for process in processes:
                process.terminate()
            for process in processes:
                process.wait()

    try:
        asyncio.run(supervise())
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")


def main() -> None:
    configure_logging()
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting Seka School Portal in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
