"""lfcli -- command-line client for the Langfuse public REST API.

The ``lf`` command authenticates against a Langfuse host with a public/secret
key pair, queries traces, sessions, observations, scores, prompts and
datasets, creates new records, and renders the JSON results as a table,
JSON, CSV or Markdown.

Typical workflow::

    lf config setup                     # store a profile
    lf traces list --limit 20           # query the API
    lf -f csv -o scores.csv scores list # export to a file

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: Profile file storage and credential resolution.
    client: Authenticated transport, pagination and resource operations.
    formatters: Schema-less table/JSON/CSV/Markdown rendering.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr discipline with Rich support.
"""

__version__ = "0.3.0"
