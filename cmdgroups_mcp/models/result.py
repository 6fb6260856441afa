"""Execution result models."""

from dataclasses import dataclass


@dataclass
class CommandResult:
    """Outcome of one runner call: Ok(text) or Err(text)."""

    ok: bool
    text: str

    @classmethod
    def success(cls, text: str) -> "CommandResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, text: str) -> "CommandResult":
        return cls(ok=False, text=text)


@dataclass
class ExecutionOutcome:
    """Per-command record of a batch run.

    ``output`` holds captured stdout on success or an ``Error: ...`` string on
    failure. Callers never need to branch on the result type.
    """

    name: str
    output: str

    @classmethod
    def from_result(cls, name: str, result: CommandResult) -> "ExecutionOutcome":
        """Flatten a tagged result into the text-only batch contract."""
        if result.ok:
            return cls(name=name, output=result.text)
        return cls(name=name, output=f"Error: {result.text}")

    @property
    def failed(self) -> bool:
        """Whether the output is an error string."""
        return self.output.startswith("Error: ")

    def as_tuple(self) -> tuple[str, str]:
        return (self.name, self.output)
