# backend/app.py
import click
from flask import Flask
from flask.cli import FlaskGroup
from sqlalchemy.exc import OperationalError

from config import Config
from models import db
from schema import DIALECTS, create_schema, render_ddl, reset_database
from seed import SeedError, seed_database


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config["SQLALCHEMY_DATABASE_URI"] = config_object.database_uri()
    db.init_app(app)

    # Ensure DB tables exist
    with app.app_context():
        try:
            create_schema()
        except OperationalError as e:
            app.logger.warning("DB create_all warning: %s", e)

    register_commands(app)
    return app


def register_commands(app):
    # ---------------- INIT DB ----------------
    @app.cli.command("init-db")
    @click.option("--seed", "with_seed", is_flag=True, help="Insert the sample rows after creating the schema.")
    def init_db(with_seed):
        """Drop and re-create the catalog database."""
        reset_database()
        click.echo("Initialized the catalog database.")
        if with_seed:
            _run_seed()

    # ---------------- SEED ----------------
    @app.cli.command("seed")
    def seed():
        """Insert the sample rows into an empty catalog."""
        _run_seed()

    # ---------------- SHOW DDL ----------------
    @app.cli.command("show-ddl")
    @click.option("--dialect", type=click.Choice(sorted(DIALECTS)), default="mysql", show_default=True)
    def show_ddl(dialect):
        """Print the CREATE statements for the catalog schema."""
        for statement in render_ddl(dialect):
            click.echo(statement)
            click.echo()


def _run_seed():
    try:
        counts = seed_database()
    except SeedError as e:
        raise click.ClickException(str(e)) from e
    for table, count in counts.items():
        click.echo(f"{table}: {count}")


cli = FlaskGroup(create_app=create_app)


if __name__ == "__main__":
    cli()
