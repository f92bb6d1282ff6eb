"""Command-line interface for the ERP counter engine."""

import click
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from .database import SessionLocal, engine, init_db
from .exceptions import CounterError
from .models.enums import ComponentType, DefinitionLevel, ResetPolicy, SequenceType
from .seed import seed_if_empty
from .services import DEFAULT_REFERENCE_DATE, counter_definition_service, get_next_counter
from .utils.logger import logger


def _enum_name(enum_cls, value) -> str:
    try:
        return enum_cls(value).name
    except ValueError:
        return str(value)


@click.group()
def cli():
    """ERP counter CLI."""
    pass


# Database commands
@cli.group()
def db():
    """Database management commands."""
    pass


@db.command()
@click.option("--no-seed", is_flag=True, help="Skip the default counter definitions")
def init(no_seed):
    """Initialize the database."""
    click.echo("Initializing database...")
    try:
        init_db(seed=not no_seed)
        click.echo("✅ Database initialized successfully!")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)


@db.command()
def seed():
    """Insert the default counter definitions if none exist."""
    seed_if_empty(engine)
    click.echo("✅ Seed complete")


# Definition commands
@cli.group()
def definition():
    """Counter definition commands."""
    pass


@definition.command("list")
@click.option("--limit", default=100, help="Maximum number of definitions")
@click.option(
    "--reset",
    type=click.Choice([policy.name for policy in ResetPolicy], case_sensitive=False),
    default=None,
    help="Only definitions with this reset policy",
)
def list_definitions(limit, reset):
    """List counter definitions."""
    reset_policy = ResetPolicy[reset.upper()] if reset else None
    session = SessionLocal()
    try:
        definitions = counter_definition_service.list_definitions(
            session, limit=limit, reset_policy=reset_policy
        )
        if not definitions:
            click.echo("No counter definitions found.")
            return
        for item in definitions:
            click.echo(
                f"{item.sequence_code:<20} "
                f"{_enum_name(ResetPolicy, item.reset_policy):<12} "
                f"{_enum_name(DefinitionLevel, item.definition_level):<8} "
                f"{item.description or ''}"
            )
    finally:
        session.close()


@definition.command("show")
@click.argument("code")
def show_definition(code):
    """Show the components of a counter definition."""
    session = SessionLocal()
    try:
        item = counter_definition_service.get_by_code(session, code)
        if not item:
            click.echo(f"❌ Counter definition '{code}' not found", err=True)
            raise SystemExit(1)

        click.echo(f"Code:        {item.sequence_code}")
        click.echo(f"Description: {item.description or ''}")
        click.echo(f"Reset:       {_enum_name(ResetPolicy, item.reset_policy)}")
        click.echo(f"Level:       {_enum_name(DefinitionLevel, item.definition_level)}")
        click.echo(f"Type:        {_enum_name(SequenceType, item.sequence_type)}")
        click.echo(f"Components:  {item.number_of_components}")
        for component in item.components:
            constant = f" '{component.constant_value}'" if component.constant_value else ""
            click.echo(
                f"  {component.position:>2}. "
                f"{_enum_name(ComponentType, component.component_type)}"
                f"({component.component_length}){constant}"
            )
    finally:
        session.close()


@cli.command("next")
@click.argument("code")
@click.option("--site", default=None, help="Site code for site-level counters")
@click.option(
    "--date",
    "reference_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date (YYYY-MM-DD)",
)
@click.option("--complement", default="", help="Complement embedded in the number")
def next_number(code, site, reference_date, complement):
    """Issue the next number for a counter definition."""
    reference = reference_date.date() if reference_date else DEFAULT_REFERENCE_DATE
    try:
        number = get_next_counter(code, site=site, reference_date=reference, complement=complement)
    except CounterError as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    if not number:
        click.echo(f"⚠️  Counter '{code}' has no sequence number component")
        return
    click.echo(number)


if __name__ == "__main__":
    cli()
