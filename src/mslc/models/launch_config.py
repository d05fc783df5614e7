"""Validated launch configuration model."""

from pydantic import BaseModel, ConfigDict


class LaunchConfig(BaseModel):
    """How to start the server process. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    working_directory: str
    artifact: str
    interpreter_path: str
    interpreter_args: tuple[str, ...] = ()
    headless: bool = False
