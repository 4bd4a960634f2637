import argparse
import dataclasses
from typing import Any, Self

from rich.markup import escape


def cli_arg(
    *flags: str,
    required: bool = False,
    default=None,
    type: Any = str,
    help: str = "",
    action: str | None = None,
    **dataclass_kwargs,
) -> Any:
    metadata = {
        "help": help,
        "flags": flags,
        "required": required,
        "action": action,
    }
    if action not in ("store_true", "store_false", "append"):
        metadata["type"] = type

    return dataclasses.field(default=default, **dataclass_kwargs, metadata=metadata)


class ArgparseModel:
    '''
    expects the `dataclass` decorator to be used
    along with the `cli_arg` function for field
    definitions.
    '''
    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        """
        register the arguments with argparse

        Parameters
        ----------
        parser : argparse.ArgumentParser
        """
        for field in dataclasses.fields(cls):  # type: ignore
            flags = field.metadata["flags"]
            default = field.default if field.default is not dataclasses.MISSING else None

            add_kwargs = {
                "dest": field.name,
                "default": default,
                "help": field.metadata.get("help", ""),
            }
            if field.metadata.get("required"):
                add_kwargs["required"] = True

            if "type" in field.metadata:
                add_kwargs["type"] = field.metadata["type"]

            if field.metadata.get("action", None):
                add_kwargs["action"] = field.metadata["action"]

            parser.add_argument(*flags, **add_kwargs)

    def show(self) -> str:
        """
        Shows the CLI arguments

        Returns
        -------
        str
        """
        output = "CLI Arguments:\n"
        for field in dataclasses.fields(self):  # type: ignore
            value = getattr(self, field.name)
            if value is not None:
                output += f" - [bold]{field.name}[/bold]: {escape(str(value))}\n"
        return output

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> Self:
        """
        Create an instance of the model from argparse.Namespace

        Parameters
        ----------
        args : argparse.Namespace

        Returns
        -------
        ArgparseModel
        """
        field_names = {field.name for field in dataclasses.fields(cls)}  # type: ignore
        arg_dict = {k: v for k, v in vars(args).items() if k in field_names}
        return cls(**arg_dict)  # type: ignore
