"""
toypyc - toypython Translator Command-Line Interface
====================================================

Command-line front end for the toypython to LLVM IR translator.

Usage Examples
--------------
Basic translation (writes prog.tp.Output):
    $ toypyc prog.tp

With output file:
    $ toypyc prog.tp -o prog.ll

Print IR to stdout and verify it with LLVM:
    $ toypyc --print-ir --verify prog.tp

Debugging:
    $ toypyc --tokens prog.tp
    $ toypyc --ast prog.tp
    $ toypyc -v prog.tp
"""

import logging
from pathlib import Path
from typing import Optional

import click

from toypython import __version__
from toypython.compiler import Translator, TranslatorOptions
from toypython.compiler.ast import ASTPrinter
from toypython.compiler.lexer import CharacterSource, Scanner
from toypython.compiler.parser import Parser
from toypython.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def default_output_path(input_file: Path) -> Path:
    """Derive the output path by appending '.Output' to the input name."""
    return input_file.with_name(input_file.name + ".Output")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output IR file (default: INPUT_FILE.Output)",
)
@click.option(
    "--module-name",
    default=None,
    help="Name of the generated IR module (default: input path)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "--verify",
    is_flag=True,
    help="Verify the generated module with LLVM",
)
@click.option(
    "--print-ir",
    is_flag=True,
    help="Write the IR to stdout instead of a file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="toypyc")
def main(
    input_file: Path,
    output: Optional[Path],
    module_name: Optional[str],
    tokens: bool,
    ast: bool,
    verify: bool,
    print_ir: bool,
    verbose: bool,
) -> None:
    """
    Translate a toypython program to LLVM IR.

    INPUT_FILE is the toypython source file to translate.

    \b
    Examples:
        toypyc prog.tp               # Outputs prog.tp.Output
        toypyc prog.tp -o prog.ll    # Specify output file
        toypyc --print-ir prog.tp    # IR to stdout
        toypyc --tokens prog.tp      # Dump tokens

    \b
    Language:
        x = 5;        assignment of a number or a variable
        return x;     return a number or a variable
        # comment     to end of line
    """
    setup_logging(verbose)

    if output is None:
        output = default_output_path(input_file)

    # Environment provides defaults, flags override
    options = TranslatorOptions.from_env()
    if module_name:
        options.module_name = module_name
    if verify:
        options.verify = True

    try:
        if tokens:
            with input_file.open(encoding="utf-8") as stream:
                scanner = Scanner(CharacterSource(stream), str(input_file))
                for token in scanner.tokenize():
                    click.echo(repr(token))
            return

        if ast:
            with input_file.open(encoding="utf-8") as stream:
                block = Parser(Scanner(CharacterSource(stream), str(input_file))).parse()
            click.echo(ASTPrinter().print(block))
            return

        logger.debug(f"Translating {input_file}")
        result = Translator(options).translate_file(input_file)

        if print_ir:
            click.echo(result.ir)
            return

        output.write_text(result.ir, encoding="utf-8")

        logger.debug(f"Scanned {result.token_count} tokens")
        logger.debug(f"Generated {len(result.block)} statements")
        click.echo(f"Translated {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
