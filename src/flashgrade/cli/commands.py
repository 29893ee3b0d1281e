"""
CLI Commands

Commands for checking single answers, auditing card decks and showing the
active configuration.
"""

import json

import click
import yaml
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from ..core.exceptions import CardDataError, RuleValidationError
from ..data.cards import load_cards, audit_deck
from ..evaluation.grader import AnswerGrader
from ..evaluation.matcher import AnswerMatcher
from ..evaluation.rules import GradingRule
from ..evaluation.feedback import feedback_message
from ..utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


def _parse_concept_group(value: str):
    """Split a 'tro|tron|finns' option value into a group of patterns."""
    return [pattern.strip() for pattern in value.split('|') if pattern.strip()]


@click.command()
@click.argument('answer')
@click.argument('user_input')
@click.option('--accept', '-a', 'accepted', multiple=True, help='Accepted alternative phrasing (repeatable)')
@click.option('--concept', '-g', 'concepts', multiple=True,
              help="Concept group as patterns joined by '|' (repeatable)")
@click.option('--threshold', '-t', type=float, help='N-gram similarity threshold (0-1)')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table',
              help='Output format')
@click.pass_context
def check(ctx, answer, user_input, accepted, concepts, threshold, output_format):
    """Check USER_INPUT against the correct ANSWER.

    \b
    🔍 EXAMPLES:

    flashgrade check "Korset" "Kors"
    flashgrade check "Abraham" "Abrahm" -a Abraham -a Abram -a Ibrahim -t 0.6
    flashgrade check "Tron på en enda Gud" "Det finns bara en gud" \\
        -g "tro|tron|finns" -g "en|enda|bara" -g gud

    \b
    💡 Without --accept, --concept or --threshold the answer is graded without
    a rule, which only allows exact matches and long enough substrings.
    Exits with status 1 when the answer is rejected.
    """
    rule = None
    if accepted or concepts or threshold is not None:
        try:
            rule = GradingRule(
                accepted=list(accepted) or None,
                concept_groups=[_parse_concept_group(c) for c in concepts] or None,
                ngram_threshold=threshold,
            ).validate()
        except RuleValidationError as e:
            raise click.BadParameter(str(e))

    config = ctx.obj.get('config') if ctx.obj else None
    grader = AnswerGrader(AnswerMatcher.from_config(config))
    graded = grader.grade(user_input, answer, rule)

    if output_format == 'json':
        click.echo(json.dumps(graded.to_dict(), ensure_ascii=False, indent=2))
    else:
        message = feedback_message(graded)
        color = "green" if graded.is_correct else ("yellow" if graded.near_miss else "red")
        body = f"[bold {color}]{message.title}[/bold {color}]"
        if message.subtitle:
            body += f"\n[dim]{message.subtitle}[/dim]"
        body += "\n\n" + grader.explain(graded)
        console.print(Panel(body, title="Answer Check", border_style=color))

    ctx.exit(0 if graded.is_correct else 1)


@click.command()
@click.argument('deck', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table',
              help='Output format')
@click.pass_context
def audit(ctx, deck, output_format):
    """Check that every card accepts its own accepted answers.

    \b
    🔍 EXAMPLES:

    flashgrade audit examples/cards.yaml
    flashgrade audit deck.json --format json

    \b
    💡 Each accepted answer is graded in its authored and lowercase form.
    Exits with status 1 when any of them is rejected.
    """
    try:
        cards = load_cards(deck)
    except CardDataError as e:
        console.print(f"[red]Error loading deck: {str(e)}[/red]")
        ctx.exit(2)

    config = ctx.obj.get('config') if ctx.obj else None
    issues = audit_deck(cards, AnswerMatcher.from_config(config))

    if output_format == 'json':
        click.echo(json.dumps({
            'cards': len(cards),
            'issues': [issue.to_dict() for issue in issues],
        }, ensure_ascii=False, indent=2))
    elif issues:
        table = Table(title="Rejected Accepted Answers")
        table.add_column("Card", style="cyan")
        table.add_column("Variant", style="magenta")
        table.add_column("Match", justify="center")
        table.add_column("Similarity", justify="right", style="red")
        for issue in issues:
            similarity = f"{issue.similarity:.3f}" if issue.similarity is not None else "-"
            table.add_row(issue.card_id, issue.variant, issue.match_type, similarity)
        console.print(table)
        console.print(f"[red]✗ {len(issues)} issue(s) in {len(cards)} cards[/red]")
    else:
        console.print(f"[green]✓ All accepted answers pass for {len(cards)} cards[/green]")

    ctx.exit(1 if issues else 0)


@click.command()
@click.option('--format', 'output_format', type=click.Choice(['table', 'json', 'yaml']), default='table',
              help='Output format')
@click.pass_context
def show(ctx, output_format):
    """Show current configuration.

    \b
    📋 EXAMPLES:

    flashgrade config show
    flashgrade config show --format yaml
    """
    config = ctx.obj.get('config') if ctx.obj else None
    if not config:
        console.print("[red]Configuration not available[/red]")
        ctx.exit(1)

    config_dict = config.to_dict()

    if output_format == 'json':
        click.echo(json.dumps(config_dict, indent=2))
    elif output_format == 'yaml':
        click.echo(yaml.safe_dump(config_dict, default_flow_style=False, allow_unicode=True))
    else:
        table = Table(title="Configuration")
        table.add_column("Section", style="cyan")
        table.add_column("Setting", style="magenta")
        table.add_column("Value", style="green")

        for key in ('name', 'version', 'environment', 'debug'):
            table.add_row("app", key, str(config_dict[key]))
        for section in ('grading', 'logging'):
            for key, value in config_dict[section].items():
                table.add_row(section, key, str(value))

        console.print(table)
