"""Prompt commands -- browse, version and label managed prompts.

Prompt content for ``create-text`` and ``create-chat`` is read from
``--file`` or, when omitted, from stdin::

    cat system.txt | lf prompts create-text --name support-bot --label staging
    lf prompts create-chat --name qa --file messages.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from lfcli.commands import open_client, parse_json_option, read_content, render
from lfcli.exceptions import InvalidUsageError
from lfcli.formatters import OutputFormat
from lfcli.models import ChatMessage, ChatPromptCreate, TextPromptCreate
from lfcli.output import emit, success

prompts_app = typer.Typer(no_args_is_help=True)


@prompts_app.command("list")
def prompts_list(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Filter by prompt name."),
    label: Optional[str] = typer.Option(None, "--label", help="Filter by label."),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Filter by tag."),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List prompts."""
    with open_client(ctx) as client:
        prompts = client.list_prompts(name=name, label=label, tag=tag, limit=limit, page=page)
    render(ctx, prompts)


@prompts_app.command("get")
def prompts_get(
    ctx: typer.Context,
    name: str = typer.Argument(help="Prompt name."),
    version: Optional[int] = typer.Option(None, "--version", help="Specific version."),
    label: Optional[str] = typer.Option(None, "--label", help="Version carrying this label."),
    raw: bool = typer.Option(False, "--raw", help="Print only the prompt content."),
) -> None:
    """Get a prompt.

    Prints JSON by default. ``--raw`` prints just the prompt text (chat
    prompts as their JSON message list), ready to pipe elsewhere.
    """
    with open_client(ctx) as client:
        prompt = client.get_prompt(name, version=version, label=label)

    if raw:
        content = prompt.get("prompt")
        if isinstance(content, str):
            emit(content)
        else:
            emit(json.dumps(content, indent=2, ensure_ascii=False))
        return
    render(ctx, prompt, default_format=OutputFormat.JSON)


def _chat_messages(content: str) -> list[ChatMessage]:
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"Chat prompt must be a JSON array of messages: {exc}") from exc
    if not isinstance(raw, list):
        raise InvalidUsageError("Chat prompt must be a JSON array of messages")
    try:
        return [ChatMessage.model_validate(message) for message in raw]
    except ValidationError as exc:
        raise InvalidUsageError(f"Invalid chat message: {exc}") from exc


@prompts_app.command("create-text")
def prompts_create_text(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Prompt name."),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Read the prompt from this file instead of stdin."
    ),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Commit message."),
    labels: Optional[List[str]] = typer.Option(
        None, "--label", help="Label for the new version (repeatable)."
    ),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)."),
    config: Optional[str] = typer.Option(None, "--config", help="Model config as JSON."),
) -> None:
    """Create a new version of a text prompt."""
    prompt = TextPromptCreate(
        name=name,
        prompt=read_content(file),
        labels=labels or [],
        tags=tags or [],
        config=parse_json_option(config, "--config"),
        commit_message=message,
    )
    with open_client(ctx) as client:
        created = client.create_prompt(prompt)
    render(ctx, created)


@prompts_app.command("create-chat")
def prompts_create_chat(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Prompt name."),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Read the JSON messages from this file instead of stdin."
    ),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Commit message."),
    labels: Optional[List[str]] = typer.Option(
        None, "--label", help="Label for the new version (repeatable)."
    ),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)."),
    config: Optional[str] = typer.Option(None, "--config", help="Model config as JSON."),
) -> None:
    """Create a new version of a chat prompt.

    The content is a JSON array of ``{"role": ..., "content": ...}`` objects.
    """
    prompt = ChatPromptCreate(
        name=name,
        prompt=_chat_messages(read_content(file)),
        labels=labels or [],
        tags=tags or [],
        config=parse_json_option(config, "--config"),
        commit_message=message,
    )
    with open_client(ctx) as client:
        created = client.create_prompt(prompt)
    render(ctx, created)


@prompts_app.command("label")
def prompts_label(
    ctx: typer.Context,
    name: str = typer.Argument(help="Prompt name."),
    version: int = typer.Argument(help="Version to relabel."),
    labels: List[str] = typer.Option(..., "--label", help="New label (repeatable)."),
) -> None:
    """Set the labels of a prompt version.

    Example::

        lf prompts label support-bot 7 --label production
    """
    with open_client(ctx) as client:
        updated = client.update_prompt_labels(name, version, labels)
    render(ctx, updated)


@prompts_app.command("delete")
def prompts_delete(
    ctx: typer.Context,
    name: str = typer.Argument(help="Prompt name."),
    version: Optional[int] = typer.Option(None, "--version", help="Only this version."),
    label: Optional[str] = typer.Option(None, "--label", help="Only versions with this label."),
) -> None:
    """Delete a prompt, or a subset of its versions."""
    with open_client(ctx) as client:
        client.delete_prompt(name, version=version, label=label)
    success(f"Prompt '{name}' deleted successfully")
