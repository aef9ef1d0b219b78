## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# monkeyfl — A tree-walking interpreter for the Monkey language, with closures.
#

import sys
import time
import getpass
import traceback
from pathlib import Path
from dataclasses import dataclass

import click

from .types import Error
from .errors import MonkeyParseError, MonkeyIncompleteParse
from .parser import format_parse_error_context
from .formatting import write_without_ansi, format_value, format_diagnostics

from . import api


SOURCE_SUFFIX = '.monkey'


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool


@dataclass(frozen=True)
class ExecutionItem:
    filename: str
    source: str | None = None       # `None` starts an interactive session instead

    @property
    def interactive(self) -> bool:
        return self.source is None


REPL_SESSION = ExecutionItem('<REPL>')


class MonkeyRunner:
    """Runs scripts, inline snippets and REPL sessions against one shared session environment."""

    def __init__(self, config: RuntimeConfig):
        self.config = config
        if config.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = api._RUNTIME
        self.stats = {'steps': 0} if config.stats else None
        self.started = time.time()
        self.failure = False
        self.executed_items = 0

    def _report(self, banner: str, detail: str, context: str = '', is_repl: bool = False) -> None:
        print(f'\033[30;43m {banner} \033[0m {detail}\n{context}', file=sys.stderr)
        self.failure = True
        if not is_repl and not self.config.ignore: sys.exit(1)

    def _report_parse_error(self, exc: MonkeyParseError, filename: str, source: str) -> None:
        context = format_parse_error_context(filename, exc.line, exc.column, exc.token, source=source)
        context += '\n' + '\n'.join(f"\033[90m  {message}\033[0m" for message in exc.diagnostics) + '\n'
        self._report("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", context)

    def _report_error_value(self, value: Error, filename: str, is_repl: bool = False) -> None:
        if is_repl:
            print(format_value(value, color=True))
            return
        context = f"\n  \033[31m{value.inspect()}\033[0m\n"
        self._report("RUNTIME ERROR.", f"Evaluating `\033[97m{filename}\033[0m` produced an error!", context)

    def _report_crash(self, exc: Exception, filename: str, is_repl: bool = False) -> None:
        detail = f"Evaluating `\033[97m{filename}\033[0m` raised an exception! (Exception: \033[33m{type(exc).__name__}\033[0m)"
        self._report("INTERNAL ERROR.", detail, traceback.format_exc(), is_repl)

    def _show(self, value) -> None:
        if value is not None:
            print(format_value(value, color=True))

    def execute(self, item: ExecutionItem) -> None:
        if item.interactive:
            return self.repl()
        try:
            value = self.runtime.run(item.source, filename=item.filename, verbosity=self.config.verbose, stats=self.stats)
        except MonkeyParseError as exc:
            return self._report_parse_error(exc, item.filename, item.source)
        except Exception as exc:
            return self._report_crash(exc, item.filename)

        self.executed_items += 1
        if isinstance(value, Error):
            self._report_error_value(value, item.filename)
        else:
            self._show(value)

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        try:
            username = getpass.getuser()
        except (KeyError, OSError):
            username = 'stranger'
        print(f'Hello {username}! Have fun with the Monkey programming language!')
        print('Feel free to hack away')
        pending = ""

        while True:
            try:
                line = input("\033[36m.. \033[0m" if pending else "\033[36m>> \033[0m")
            except (KeyboardInterrupt, EOFError):
                print(""); break

            if not pending and line.strip() in ('quit', 'exit'): break
            if not pending and not line.strip(): continue
            pending += line + "\n"

            try:
                value = self.runtime.run(pending, filename=REPL_SESSION.filename, verbosity=self.config.verbose, stats=self.stats)
            except MonkeyIncompleteParse:
                continue
            except MonkeyParseError as exc:
                print(format_diagnostics(exc.diagnostics))
            except Exception as exc:
                self._report_crash(exc, REPL_SESSION.filename, is_repl=True)
            else:
                self.executed_items += 1
                if isinstance(value, Error):
                    self._report_error_value(value, REPL_SESSION.filename, is_repl=True)
                else:
                    self._show(value)
            pending = ""

    def finalize(self) -> int:
        if self.stats is not None and self.executed_items > 0:
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{time.time() - self.started:.3f}s\033[0m")
        return 1 if self.failure else 0


def plan_inputs(inputs: list[str], interactive: bool) -> list[ExecutionItem]:
    """Turn the command-line inputs into execution items, kept in the order they were given.

    Inputs are `.monkey` files, `-` for standard input, `-c CODE` for inline snippets and
    `-r/--repl` for an interactive session.  With no inputs, a terminal gets the REPL and
    anything else is read as a script from standard input.
    """
    if not inputs:
        inputs = ['--repl'] if interactive else ['-']

    items, tokens = [], iter(inputs)
    for token in tokens:
        if token in ('-c', '--command'):
            if (code := next(tokens, None)) is None:
                raise click.BadParameter(f"Missing inline Monkey code after `{token}`.")
            snippets = sum(1 for item in items if item.filename.startswith('<INPUT_'))
            items.append(ExecutionItem(f'<INPUT_{snippets + 1}>', code.rstrip() + '\n'))
        elif token in ('-r', '--repl'):
            items.append(REPL_SESSION)
        elif token == '-':
            items.append(ExecutionItem('<STDIN>', click.get_text_stream('stdin').read()))
        elif token.startswith('-'):
            raise click.BadParameter(f"Unknown option `{token}`.")
        else:
            path = Path(token)
            if path.suffix != SOURCE_SUFFIX:
                raise click.BadParameter(f"Expected a `{SOURCE_SUFFIX}` source file, got `{token}`.")
            if not path.is_file():
                raise click.BadParameter(f"File `{token}` not found.")
            items.append(ExecutionItem(str(path), path.read_text(encoding='utf-8')))
    return items


@click.command(context_settings={'ignore_unknown_options': True})
@click.option('--verbose', '-v', default=0, count=True, help='Print the parsed program (-v) and its tokens (-vv).')
@click.option('--ignore', '-i', is_flag=True, help='Keep executing the remaining inputs after an error.')
@click.option('--stats', is_flag=True, help='Display execution statistics (evaluated nodes and time).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.argument('inputs', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool, inputs: tuple[str, ...]) -> None:
    """Run Monkey programs: `FILE.monkey`, `-` for stdin, `-c CODE` or `-r/--repl`, in any order."""
    items = plan_inputs(list(inputs), interactive=sys.stdin.isatty())
    runner = MonkeyRunner(RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain))
    for item in items:
        runner.execute(item)
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='monkeyfl')


if __name__ == "__main__":
    main()
