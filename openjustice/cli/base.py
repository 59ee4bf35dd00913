"""
Command base class for the openjustice CLI.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from ..client import OpenJustice


class Command(ABC):
    """
    One top-level subcommand.

    ``build_parser`` registers a subparser under ``name`` and every alias, and
    ``_real_main`` calls ``execute`` with a client built from the global flags.
    """

    name: str = ""
    aliases: ClassVar[list[str]] = []
    description: str = ""

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        for attr in ("name", "description"):
            if not getattr(cls, attr):
                raise ValueError(f"{cls.__name__} must set '{attr}'")

    @abstractmethod
    def add_arguments(self, parser: ArgumentParser) -> None:
        """Register this command's flags and positionals."""

    @abstractmethod
    def execute(self, args: Namespace, client: "OpenJustice") -> int:
        """Run the command and return the process exit code."""

    def get_all_names(self) -> list[str]:
        return [self.name, *self.aliases]
