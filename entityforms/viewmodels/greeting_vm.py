from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GreetingVM:
    """Name input and greeting display of the echo form."""

    name: str = ""
    greeting: str = ""

    def update_name(self, value: str) -> None:
        self.name = value

    def show(self, text: str) -> None:
        self.greeting = text

    def clear(self) -> None:
        self.greeting = ""
