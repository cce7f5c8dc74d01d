import click

from marketing_cms.application.seed import seed_defaults
from marketing_cms.extensions import db
from marketing_cms.models.user import MIN_PASSWORD_LENGTH, User


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create tables and seed default content."""
        db.create_all()
        content_created, policies_created = seed_defaults(db.session)
        click.echo(
            f"Database ready: {content_created} content sections and "
            f"{policies_created} policy pages created"
        )

    @app.cli.command("create-admin")
    @click.option("--username", prompt="Username")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(username, password):
        """Create an admin user."""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise click.BadParameter(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                param_hint="--password",
            )

        if User.query.filter_by(username=username).first():
            raise click.ClickException(f'User "{username}" already exists')

        user = User(username=username, role="admin")
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        current_count = User.query.count()
        click.echo(f"Admin user {username} created ({current_count} users total)")
