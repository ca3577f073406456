"""Config commands -- create, inspect and list credential profiles.

Provides the ``lf config`` sub-command group. Profiles live in
``config.yml`` under the lfcli config directory (see
:func:`~lfcli.config.get_config_dir`). ``setup`` and ``set`` test the
credentials against the API before anything is written, so a saved profile
is always one that worked at the time.
"""

from __future__ import annotations

import os
from typing import Optional

import typer

from lfcli.client import LangfuseClient
from lfcli.commands import render
from lfcli.config import (
    ENV_HOST,
    ENV_PROFILE,
    ENV_PUBLIC_KEY,
    ENV_SECRET_KEY,
    get_profile,
    list_profiles,
    mask_key,
    set_profile,
)
from lfcli.exceptions import ConfigurationError, LfcliError
from lfcli.models import DEFAULT_HOST, DEFAULT_PROFILE, Config, ProfileEntry
from lfcli.output import emit, error, info, success

config_app = typer.Typer(no_args_is_help=True)


def _default_profile(ctx: typer.Context, profile: Optional[str]) -> str:
    if profile:
        return profile
    root = ctx.obj.get("profile") if isinstance(ctx.obj, dict) else None
    return root or DEFAULT_PROFILE


def _save_after_test(profile: str, public_key: str, secret_key: str, host: str) -> None:
    """Test the credentials, then persist them under *profile*."""
    config = Config(public_key=public_key, secret_key=secret_key, host=host, profile=profile)
    info("Testing connection...")
    try:
        with LangfuseClient(config) as client:
            client.test_connection()
    except LfcliError:
        error("Connection test failed")
        raise
    success("Connection successful!")

    path = set_profile(
        profile,
        ProfileEntry(public_key=public_key, secret_key=secret_key, host=host),
    )
    success(f"Configuration saved to profile '{profile}'")
    info(f"Config file: {path}")
    if profile != DEFAULT_PROFILE:
        info("To use this profile, either:")
        info(f"  lf --profile {profile} traces list")
        info(f"  export {ENV_PROFILE}={profile}")


@config_app.command("setup")
def config_setup(
    non_interactive: bool = typer.Option(
        False,
        "--non-interactive",
        help="Read the profile from LANGFUSE_* environment variables instead of prompting.",
    ),
) -> None:
    """Create or update a profile.

    Interactively asks for the profile name, keys and host. With
    ``--non-interactive`` the values come from ``LANGFUSE_PROFILE``,
    ``LANGFUSE_PUBLIC_KEY``, ``LANGFUSE_SECRET_KEY`` and ``LANGFUSE_HOST``.

    Example::

        lf config setup
        LANGFUSE_PUBLIC_KEY=pk-lf-... LANGFUSE_SECRET_KEY=sk-lf-... \\
            lf config setup --non-interactive
    """
    if non_interactive:
        profile = os.environ.get(ENV_PROFILE) or DEFAULT_PROFILE
        public_key = os.environ.get(ENV_PUBLIC_KEY)
        secret_key = os.environ.get(ENV_SECRET_KEY)
        host = os.environ.get(ENV_HOST) or DEFAULT_HOST
        if not public_key:
            raise ConfigurationError(f"{ENV_PUBLIC_KEY} not set")
        if not secret_key:
            raise ConfigurationError(f"{ENV_SECRET_KEY} not set")
    else:
        info("Langfuse CLI Configuration Setup")
        profile = typer.prompt("Profile name", default=DEFAULT_PROFILE)
        public_key = typer.prompt("Public key")
        secret_key = typer.prompt("Secret key", hide_input=True)
        host = typer.prompt("Host URL", default=DEFAULT_HOST)

    _save_after_test(profile, public_key, secret_key, host)


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    public_key: str = typer.Option(..., "--public-key", envvar=ENV_PUBLIC_KEY, help="Public key."),
    secret_key: str = typer.Option(..., "--secret-key", envvar=ENV_SECRET_KEY, help="Secret key."),
    host: Optional[str] = typer.Option(None, "--host", envvar=ENV_HOST, help="Host URL."),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Profile name."),
) -> None:
    """Save keys to a profile after testing them.

    Example::

        lf config set --profile staging --public-key pk-lf-... --secret-key sk-lf-...
    """
    _save_after_test(
        _default_profile(ctx, profile), public_key, secret_key, host or DEFAULT_HOST,
    )


@config_app.command("show")
def config_show(
    ctx: typer.Context,
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Profile name."),
) -> None:
    """Show a profile with its keys masked."""
    name = _default_profile(ctx, profile)
    entry = get_profile(name)
    if entry is None:
        raise ConfigurationError(f"Profile '{name}' not found")

    render(ctx, {
        "profile": name,
        "public_key": mask_key(entry.public_key) if entry.public_key else "(not set)",
        "secret_key": mask_key(entry.secret_key) if entry.secret_key else "(not set)",
        "host": entry.host or f"(default: {DEFAULT_HOST})",
    })


@config_app.command("list")
def config_list() -> None:
    """List configured profile names, one per line."""
    profiles = list_profiles()
    if not profiles:
        info("No profiles configured.")
        info("Run 'lf config setup' to create a profile.")
        return
    emit("\n".join(profiles))
