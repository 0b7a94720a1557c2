## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# walle — A pixel-art language driving a pen over a square canvas, with labels and jumps.
#

import sys
import time
import traceback
from dataclasses import dataclass

import click

from .errors import WalleError, WalleParseErrors
from .parser import parse, format_error_context
from .lexer import tokenize
from .canvas import Canvas, MIN_SIZE, MAX_SIZE, DEFAULT_SIZE
from .formatting import write_without_ansi, format_agent, format_statement, show_canvas
from .runtime import Runtime


BANNERS = {'syntax': "SYNTAX ERROR.", 'semantic': "SEMANTIC ERROR.", 'execution': "EXECUTION ERROR."}


@dataclass(frozen=True)
class RuntimeConfig:
    canvas_size: int = DEFAULT_SIZE
    strict_variables: bool = True
    verbose: int = 0
    stats: bool = False
    plain: bool = False
    ignore: bool = False
    preview: bool = False
    tokens: bool = False
    ast: bool = False


@dataclass
class ExecutionItem:
    source: str
    filename: str


class WalleRunner:
    def __init__(self, config: RuntimeConfig):
        self.config = config

        if config.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = Runtime(Canvas(config.canvas_size), strict_variables=config.strict_variables)
        self.total_stats = {'steps': 0, 'start': time.time()} if config.stats else None
        self.failure = False
        self.executed_items = 0

    def _fatal_error(self, message: str, detail: str, context: str = '') -> None:
        print(f'\033[30;43m {message} \033[0m {detail}\n{context}', file=sys.stderr)

    def _report(self, exc: WalleError, filename: str, source: str) -> None:
        banner = BANNERS.get(exc.kind, "ERROR.")
        context = format_error_context(source, exc.line, filename)
        if exc.context:
            context += f"\n\033[90m{exc.context}\033[0m\n"
        self._fatal_error(banner, f"{exc.message} (Exception: \033[33m{type(exc).__name__}\033[0m)", context)

    def _handle_exception(self, exc: Exception, filename: str, source: str) -> None:
        if isinstance(exc, WalleParseErrors):
            for err in exc.errors:
                self._report(err, filename, source)
        elif isinstance(exc, WalleError):
            self._report(exc, filename, source)
        else:
            print(f'\033[30;43m INTERNAL ERROR. \033[0m Running `\033[97m{filename}\033[0m` caused a problem! '
                  f'(Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            traceback.print_exc()

        self.failure = True
        if not self.config.ignore: sys.exit(1)

    def _dump(self, source: str) -> None:
        if self.config.tokens:
            for tok in tokenize(source):
                print(f"\033[90m{tok.line:>5} |\033[0m {tok!r}")
        if self.config.ast:
            for stmt in parse(tokenize(source)).statements:
                print(f"\033[90m{stmt.line:>5} |\033[0m {format_statement(stmt)}")

    def execute_items(self, items: list[ExecutionItem]) -> None:
        for item in items:
            self._execute_script(item.source, item.filename)

    def _execute_script(self, source: str, filename: str) -> None:
        self.runtime.clear()
        try:
            self._dump(source)
            state = self.runtime.run(source, verbosity=self.config.verbose, stats=self.total_stats)
        except Exception as exc:
            self._handle_exception(exc, filename, source)
            return
        finally:
            for warning in self.runtime.warnings:
                print(f'\033[30;43m WARNING. \033[0m {warning}', file=sys.stderr)

        self.executed_items += 1
        print(f"\033[97m\033[48;5;30m AGENT. \033[0m {format_agent(state)}")
        if self.config.preview:
            show_canvas(self.runtime.canvas)

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('scripts', nargs=-1, type=click.File('r', encoding='utf-8'))
@click.option('--command', '-c', 'commands', multiple=True, help='Inline program source to run, may be repeated.')
@click.option('--size', '-s', type=click.IntRange(MIN_SIZE, MAX_SIZE), default=DEFAULT_SIZE, show_default=True,
              envvar='WALLE_CANVAS_SIZE', help='Side length of the square canvas.')
@click.option('--lenient', is_flag=True, help='Treat undefined variables as 0 with a warning instead of an error.')
@click.option('--verbose', '-v', default=0, count=True, help='Trace statements while executing; repeat for more.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue with the next program.')
@click.option('--preview', is_flag=True, help='Print a downsampled preview of the canvas after each run.')
@click.option('--tokens', is_flag=True, help='Print the token stream before running.')
@click.option('--ast', 'dump_ast', is_flag=True, help='Print parsed statements before running.')
@click.pass_context
def cli(ctx: click.Context, scripts, commands: tuple[str, ...], size: int, lenient: bool, verbose: int,
        stats: bool, plain: bool, ignore: bool, preview: bool, tokens: bool, dump_ast: bool) -> None:
    config = RuntimeConfig(canvas_size=size, strict_variables=not lenient, verbose=verbose, stats=stats,
                           plain=plain, ignore=ignore, preview=preview, tokens=tokens, ast=dump_ast)

    items = [ExecutionItem(script.read(), script.name or '<STDIN>') for script in scripts]
    items += [ExecutionItem(source, f'<INPUT_{i}>') for i, source in enumerate(commands, start=1)]
    if not items:
        if sys.stdin.isatty():
            click.echo(ctx.get_help())
            ctx.exit(0)
        items = [ExecutionItem(sys.stdin.read(), '<STDIN>')]

    runner = WalleRunner(config)
    runner.execute_items(items)
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='walle')


if __name__ == "__main__":
    main()
