import subprocess

from wctypegen.config import FORMAT_COMMAND
from wctypegen.log import get_logger

logger = get_logger("formatter")


def format_declaration_file(cwd, file_name, command=FORMAT_COMMAND, timeout=60):
    """Run the external formatter on the generated file.

    Never raises: a missing binary, a timeout or a failing exit status only
    gets logged.
    """
    try:
        result = subprocess.run(
            [*command, file_name], cwd=cwd, capture_output=True, timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Formatter %s unavailable: %s", " ".join(command), e)
        return False
    if result.returncode != 0:
        logger.debug(
            "Formatter exited with %s: %s",
            result.returncode,
            result.stderr.decode("utf-8", errors="replace").strip(),
        )
        return False
    return True
