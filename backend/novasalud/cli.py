# Overview: Flask CLI command groups for bootstrap and inspection.

# backend/novasalud/cli.py
# Commands Legend (run from the backend directory):
# - python -m flask --app wsgi system init
#   Create tables and seed the fixed catalog (idempotent).
# - python -m flask --app wsgi system reset-db --yes
#   Drop and recreate all tables, then reseed (deletes all data).
# - python -m flask --app wsgi sales list
#   Print recorded sales, newest first.

import click
from flask.cli import with_appcontext

from .extensions import db
from .services import sales_service
from .services.seed_service import seed_catalog


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """Create tables and seed categories and products if the catalog is empty."""
    click.echo("START Initializing database...")
    db.create_all()
    if seed_catalog():
        click.echo("PASS Seeded categories and products")
    else:
        click.echo("PASS Catalog already present, nothing seeded")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables, recreate the schema and reseed the catalog.

    This will DELETE ALL SALES!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    # Rows loaded before the drop must not collide with reseeded ids
    db.session.remove()

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()
    seed_catalog()

    click.echo("PASS Database reset and catalog reseeded")


@click.group('sales')
def sales_group():
    """Sales inspection commands."""


@sales_group.command('list')
@with_appcontext
def list_sales():
    """Print recorded sales, newest first."""
    sales = sales_service.list_sales()
    if not sales:
        click.echo("No sales recorded")
        return
    for sale in sales:
        click.echo(f"{sale['id']:>5}  {sale['fecha']}  {sale['cantidad']:>4} x {sale['nombre']}")


def register_commands(app):
    app.cli.add_command(system_group)
    app.cli.add_command(sales_group)
