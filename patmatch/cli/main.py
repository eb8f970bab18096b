"""Main CLI entry point for patmatch."""

import json
import logging
import os
import sys
from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.configuration import ConfigurationManager
from ..core.exceptions import ArgumentError, PatternMatcherError
from ..core.interfaces import Span
from ..matching.factory import create_matcher
from ..matching.ranking import MatchRanker, RankedCandidate
from ..matching.word_breaker import break_characters, break_words

# Initialize rich console for better output formatting
console = Console()


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    # Check environment variable for log level override
    env_log_level = os.getenv('PATMATCH_LOG_LEVEL', '').upper()
    if env_log_level in ['DEBUG', 'INFO', 'WARNING', 'ERROR']:
        level = getattr(logging, env_log_level)
    else:
        level = logging.DEBUG if verbose else logging.WARNING

    # Check environment variable for log format override
    log_format = os.getenv('PATMATCH_LOG_FORMAT', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    logging.basicConfig(
        level=level,
        format=log_format
    )


def read_candidates(candidates: List[str], candidate_file: Optional[str]) -> List[str]:
    """Collect candidates from arguments and an optional file ('-' for stdin)."""
    collected = list(candidates)
    if candidate_file:
        with click.open_file(candidate_file, 'r', encoding='utf-8') as f:
            collected.extend(line.rstrip('\r\n') for line in f if line.strip())
    return collected


def highlight_text(candidate: str, spans: List[Span]) -> Text:
    """Render a candidate with its matched spans emphasized."""
    text = Text(candidate)
    for span in spans:
        text.stylize("bold yellow underline", span.start, span.end)
    return text


def display_match_results(ranked: List[RankedCandidate], pattern: str):
    """Display ranked matches in a formatted table."""
    table = Table(title=f"Matches for '{pattern}'")
    table.add_column("Candidate", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta")
    table.add_column("Case", style="green")
    table.add_column("Punctuation", style="white")

    for item in ranked:
        match = item.match
        table.add_row(
            highlight_text(item.candidate, list(match.matched_spans)),
            match.kind.name.lower(),
            "sensitive" if match.is_case_sensitive else "insensitive",
            "stripped" if match.punctuation_stripped else "kept",
        )

    console.print(table)


def format_json_results(ranked: List[RankedCandidate]) -> str:
    """Format ranked matches as JSON."""
    return json.dumps([
        {
            "candidate": item.candidate,
            "kind": item.match.kind.name.lower(),
            "is_case_sensitive": item.match.is_case_sensitive,
            "punctuation_stripped": item.match.punctuation_stripped,
            "matched_spans": [[span.start, span.length] for span in item.match.matched_spans],
        }
        for item in ranked
    ], indent=2)


# Global options that apply to all commands
@click.group()
@click.option('--config', '-c', type=click.Path(),
              default=lambda: os.getenv('PATMATCH_CONFIG'),
              help='Path to configuration file (env: PATMATCH_CONFIG)')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose logging (env: PATMATCH_VERBOSE)')
@click.pass_context
def cli(ctx, config, verbose):
    """
    Match and rank identifiers against camel-case, substring and fuzzy patterns.

    \b
    Examples:

      # Rank a few candidates
      patmatch match CFP CodeFixProvider CodeFormatter CFoo

      # Rank candidates from a file, allowing misspellings
      patmatch match --fuzzy lisst -f symbols.txt

      # Match dotted names container by container
      patmatch match --container-chars . Col.Lis System.Collections.List

      # Show how a name is broken into humps
      patmatch breaks XMLHttpRequest
    """
    ctx.ensure_object(dict)
    ctx.obj['config'] = config

    # Apply environment variable for verbose if not provided via CLI
    if not verbose and os.getenv('PATMATCH_VERBOSE', '').lower() in ['true', '1', 'yes']:
        verbose = True

    ctx.obj['verbose'] = verbose
    setup_logging(verbose)


@cli.command()
@click.argument('pattern')
@click.argument('candidates', nargs=-1)
@click.option('--file', '-f', 'candidate_file',
              type=click.Path(exists=True, dir_okay=False, allow_dash=True),
              help="File with one candidate per line ('-' for stdin)")
@click.option('--fuzzy/--no-fuzzy', default=None, help='Allow misspelled matches')
@click.option('--substring/--no-substring', default=None,
              help='Allow substring matches that do not start a word')
@click.option('--container-chars', default=None,
              help='Characters splitting containers, e.g. "." or "./"')
@click.option('--locale', default=None, help='Locale used for case-insensitive comparison')
@click.option('--limit', '-l', default=20, type=int, help='Maximum number of results to display')
@click.option('--format', '-o', 'output_format', default='table', type=click.Choice(['table', 'json']),
              help='Output format')
@click.pass_context
def match(ctx, pattern, candidates, candidate_file, fuzzy, substring, container_chars, locale, limit, output_format):
    """
    Rank CANDIDATES against PATTERN, best match first.

    Exits with status 1 when nothing matches.
    """
    try:
        config_manager = ConfigurationManager(config_path=ctx.obj['config'])
        options = config_manager.load_options(
            allow_fuzzy_matching=fuzzy,
            allow_simple_substring_matching=substring,
            container_split_characters=container_chars,
            locale=locale,
            include_matched_spans=True,
        )

        all_candidates = read_candidates(list(candidates), candidate_file)

        with create_matcher(pattern, options) as matcher:
            ranked = MatchRanker().rank(matcher, all_candidates, limit=limit)

    except ArgumentError as e:
        console.print(f"[red]Invalid argument:[/red] {e}")
        sys.exit(2)
    except PatternMatcherError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)

    if output_format == 'json':
        click.echo(format_json_results(ranked))
    elif ranked:
        display_match_results(ranked, pattern)
    else:
        console.print(f"[yellow]No candidates matched:[/yellow] {pattern}")

    if not ranked:
        sys.exit(1)


@cli.command()
@click.argument('text')
@click.option('--characters', is_flag=True, help='Break on every capital letter (pattern humps)')
def breaks(text, characters):
    """Show the humps TEXT is broken into."""
    spans = break_characters(text) if characters else break_words(text)

    table = Table(title=f"Humps of '{text}'")
    table.add_column("Start", style="yellow", justify="right")
    table.add_column("Length", style="yellow", justify="right")
    table.add_column("Hump", style="cyan")

    for span in spans:
        table.add_row(str(span.start), str(span.length), span.text_of(text))

    console.print(table)


def main():
    """Entry point for the patmatch console script."""
    return cli(obj={})


if __name__ == '__main__':
    sys.exit(main())
