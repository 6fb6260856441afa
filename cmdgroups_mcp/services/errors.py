"""Exception types raised by the execution core and the group store."""


class CmdGroupsError(Exception):
    """Base class for all cmdgroups_mcp errors."""


class CommandError(CmdGroupsError):
    """A single command could not be run to a successful exit."""


class CommandLaunchError(CommandError):
    """The OS could not create the process."""

    def __init__(self, command_line: str, original_error: OSError):
        """Initialize launch error.

        Args:
            command_line: Command line that failed to start
            original_error: OS error raised by the spawn call
        """
        self.command_line = command_line
        self.original_error = original_error
        super().__init__(f"Failed to start command: {original_error}")


class CommandExecutionError(CommandError):
    """The process ran and exited with a non-zero status."""

    def __init__(self, stderr: str, returncode: int):
        """Initialize execution error.

        Args:
            stderr: Captured standard error text
            returncode: Process exit status
        """
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(f"Command failed: {stderr}")


class CommandTimeoutError(CommandError):
    """The process did not exit within the allowed time."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout:g} seconds")


class GroupNotFoundError(CmdGroupsError):
    """Referenced group id does not exist in the store."""

    def __init__(self, group_id: str):
        self.group_id = group_id
        super().__init__("Group not found")


class PersistenceError(CmdGroupsError):
    """Group data could not be read, parsed or written."""
