"""
Command execution utilities for PathWatcher.

Platform queries that have no native API binding shell out through
``run_command`` so that failures are logged the same way everywhere.
"""

import shlex
import subprocess

from .. import config
from ..logging_config import get_logger

logger = get_logger(__name__)


def run_command(command, capture=False, shell=False, quiet_on_error=False, timeout=None):
    """
    Execute a command with error handling and logging.

    Args:
        command: Command to execute (list of strings or string if shell=True)
        capture: If True, return command output; if False, return success status
        shell: If True, execute through the shell; if False, exec directly
        quiet_on_error: If True, suppress error logging for expected failures
        timeout: Seconds before the command is abandoned

    Returns:
        If capture=True: Command output string or None on error
        If capture=False: True on success, False on failure
    """
    if shell and isinstance(command, list):
        command = shlex.join(command)

    if timeout is None:
        timeout = config.COMMAND_TIMEOUT

    logger.debug(f"Running command ({'shell' if shell else 'list'}): {command}")

    try:
        result = subprocess.run(
            command,
            shell=shell,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="ignore",
            timeout=timeout,
        )

        if result.returncode != 0:
            if not quiet_on_error:
                logger.debug(f"Command '{command}' failed with status {result.returncode}")
                if result.stderr:
                    logger.debug(f"Stderr: {result.stderr.strip()}")
            else:
                logger.debug(f"Command '{command}' failed (expected)")
            return None if capture else False

        return result.stdout.strip() if capture else True

    except FileNotFoundError:
        cmd_name = command.split()[0] if shell else command[0]
        logger.debug(f"Command not found: {cmd_name}")
        return None if capture else False
    except subprocess.TimeoutExpired:
        logger.warning(f"Command '{command}' timed out after {timeout}s")
        return None if capture else False
    except Exception as e:
        logger.error(f"Unexpected error running command '{command}': {e}")
        return None if capture else False
