"""
Command execution utilities for IP Updater.

All subprocess calls (keychain lookups, ipconfig) go through run_command so
failures are logged the same way and never raise.
"""

import shlex
import subprocess

from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)

DEFAULT_COMMAND_TIMEOUT = 10  # seconds


def run_command(
    command,
    capture=False,
    input=None,
    shell=False,
    quiet_on_error=False,
    timeout=DEFAULT_COMMAND_TIMEOUT,
    log_output=True,
):
    """
    Execute a command with error handling and logging.

    Args:
        command: Command to execute (list of strings or string if shell=True)
        capture: If True, return command output; if False, return success status
        input: Optional input to send to the command's stdin
        shell: If True, execute through the shell; if False, exec directly
        quiet_on_error: If True, suppress error logging for expected failures
        timeout: Seconds before the command is killed and treated as failed
        log_output: If False, never write stdout to the log (secrets)

    Returns:
        If capture=True: stripped stdout on success, None on any failure
        If capture=False: True on success, False on failure
    """
    if shell and isinstance(command, list):
        command = shlex.join(command)

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
            input=input,
            timeout=timeout,
        )
    except FileNotFoundError:
        cmd_name = command.split()[0] if shell else command[0]
        logger.error(f"Command not found: {cmd_name}")
        return None if capture else False
    except subprocess.TimeoutExpired:
        logger.error(f"Command '{command}' timed out after {timeout}s")
        return None if capture else False
    except OSError as e:
        logger.error(f"Unexpected error running command '{command}': {e}")
        return None if capture else False

    if result.returncode != 0:
        if quiet_on_error:
            logger.debug(f"Command '{command}' failed (expected)")
        else:
            logger.debug(f"Command '{command}' failed with status {result.returncode}")
            if result.stderr:
                logger.debug(f"Stderr: {result.stderr.strip()}")
        return None if capture else False

    if log_output and result.stdout:
        logger.debug(f"Command output: {result.stdout.strip()}")

    return result.stdout.strip() if capture else True
