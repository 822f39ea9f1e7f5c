class RecordParseError(ValueError):
    def __init__(self, line, token_count):
        self.msg = (
            f"Cannot convert listing line into a package record!"
            f"\nLine: `{line}`"
            f"\nExpected 3 or 4 fields, got {token_count}"
        )
        super().__init__(self.msg)


class EnvironmentListingFailed(Exception):
    def __init__(self, env_name, command, err):
        self.msg = (
            f"Failed to list packages of environment `{env_name}`!"
            f"\nRan command: `{' '.join(command)}`"
            f"\nError message: {err}"
        )
        super().__init__(self.msg)


class UsageError(Exception):
    def __init__(self, msg):
        self.msg = msg
        super().__init__(self.msg)
