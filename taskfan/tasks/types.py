from dataclasses import dataclass


@dataclass(frozen=True)
class InputTask:
    task_id: int
    task_type: str


class InputError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
