import argparse
import sys
from dataclasses import dataclass
from typing import Any, Final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dnslookup.cli.internals import ArgparseModel, cli_arg
from dnslookup.core._logging import configure_lib_logger
from dnslookup.modules.dns_records import (
    DnsConfig,
    DomainRecordCache,
    LookupResult,
    RecordKind,
    ResolutionFailed,
)

SEARCH_TYPES: Final[dict[str, RecordKind | None]] = {
    "a": RecordKind.A,
    "all": None,
    "cname": RecordKind.CNAME,
    "mx": RecordKind.MX,
    "ns": RecordKind.NS,
    "ptr": RecordKind.PTR,
    "txt": RecordKind.TXT,
}

USAGE: Final[str] = (
    "error: --domain and -s parameters required. "
    "usage: dnslookup --domain example.net -s all"
)


@dataclass
class LookupArgs(ArgparseModel):
    domain: str | None = cli_arg(
        "--domain",
        "-domain",
        help="Domain name to look up",
    )
    search_type: str | None = cli_arg(
        "-s",
        "--search-type",
        help=f"Record type to look up, one of: {', '.join(SEARCH_TYPES)}",
    )
    lifetime: float = cli_arg(
        "--lifetime",
        default=5.0,
        type=float,
        help="Seconds to spend on a single query before giving up",
    )
    tcp: bool = cli_arg(
        "--tcp",
        default=False,
        action="store_true",
        help="Query over TCP instead of UDP",
    )
    nameservers: list[str] | None = cli_arg(
        "--nameserver",
        action="append",
        help="Nameserver to query instead of the system ones, repeatable",
    )
    no_ipv6: bool = cli_arg(
        "--no-ipv6",
        default=False,
        action="store_true",
        help="Only look up IPv4 addresses",
    )
    show_errors: bool = cli_arg(
        "--show-errors",
        default=False,
        action="store_true",
        help="Print why a record type came back empty",
    )
    verbose: bool = cli_arg(
        "-v",
        "--verbose",
        default=False,
        action="store_true",
        help="Enable debug logging",
    )

    def is_valid(self) -> bool:
        return bool(self.domain) and self.search_type in SEARCH_TYPES

    def dns_config(self) -> DnsConfig:
        return DnsConfig(
            lifetime=self.lifetime,
            tcp=self.tcp,
            nameservers=tuple(self.nameservers or ()),
            include_ipv6=not self.no_ipv6,
        )


def render_value(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    return [str(item) for item in value]


def render_result(result: LookupResult) -> str:
    label = result.kind.label
    lines = render_value(result.value)
    if not lines:
        return f'[bold underline]{label}:[/bold underline] None\n'

    message = f'[bold underline]{label}:[/bold underline]\n'
    for line in lines:
        message += f'  - [italic green]{escape(line)}[/italic green]\n'
    return message


def render_warnings(results: list[LookupResult]) -> str:
    warnings = [str(r.error) for r in results if r.error is not None]
    if not warnings:
        return '[bold]Warnings:[/bold] None'
    return '[bold]Warnings:[/bold]\n' + '\n'.join(
        f'  - [red]{escape(w)}[/red]' for w in warnings
    )


def result_table(domain: str, results: dict[str, LookupResult]) -> Table:
    table = Table(title=f'DNS Lookup Results for {domain}')
    table.add_column('Record Type', style='magenta')
    table.add_column('Records', style='green')
    table.add_column('Status', style='cyan')

    for label, result in results.items():
        if isinstance(result.error, ResolutionFailed):
            status = '[red]failed[/red]'
        elif result.error is not None:
            status = 'no data'
        else:
            status = 'ok'
        table.add_row(label, str(len(render_value(result.value))), status)
    return table


class LookupCommand:
    model = LookupArgs
    console = Console()

    def __init__(self, parser: argparse.ArgumentParser) -> None:
        self.model.register(parser)

    def routine(self, args: LookupArgs) -> int:
        if not args.is_valid():
            self.console.print(USAGE, markup=False, highlight=False, soft_wrap=True)
            return 0

        if args.verbose:
            configure_lib_logger(level_name="DEBUG", rich_tracebacks=True)
            self.console.print(args.show())

        records = DomainRecordCache(args.domain, config=args.dns_config())  # type: ignore[arg-type]

        kind = SEARCH_TYPES[args.search_type]  # type: ignore[index]
        if kind is None:
            results = records.lookup_all()
            for result in results.values():
                self.console.print(render_result(result))
            self.console.print(result_table(records.domain, results))
            shown = list(results.values())
        else:
            result = records.lookup(kind)
            self.console.print(render_result(result))
            shown = [result]

        if args.show_errors:
            self.console.print(render_warnings(shown))
        return 0

    def __call__(self, args: argparse.Namespace) -> int:
        return self.routine(self.model.from_namespace(args))


def create_app() -> tuple[argparse.ArgumentParser, LookupCommand]:
    parser = argparse.ArgumentParser(
        prog="dnslookup",
        description="Look up the A, CNAME, MX, NS, PTR and TXT records of a domain",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    command = LookupCommand(parser)
    return parser, command


def main(argv: list[str] | None = None) -> int:
    parser, command = create_app()
    args = parser.parse_args(argv)
    return command(args)


def run() -> None:
    sys.exit(main())
