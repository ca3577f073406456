"""End-to-end tests for the ``lf`` command tree.

Requests never leave the process: every :class:`~lfcli.client.transport.Transport`
built during a test is wired to an :class:`httpx.MockTransport`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest
from typer.testing import CliRunner

from lfcli import __version__
from lfcli.app import app, main
from lfcli.client.transport import Transport
from lfcli.config import get_profile, set_profile
from lfcli.exceptions import AuthenticationError, ConfigurationError, InvalidUsageError
from lfcli.models import ProfileEntry

runner = CliRunner()

KEYS = ["--public-key", "pk-lf-test", "--secret-key", "sk-lf-test", "--host", "https://langfuse.test"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def serve(isolated_config: Path, make_server, monkeypatch: pytest.MonkeyPatch) -> Callable:
    """Route every transport built by the CLI to *handler*; returns the recording server."""

    def _serve(handler: Callable[[httpx.Request], httpx.Response]):
        server = make_server(handler)
        original = Transport._build_http_client

        def _build(self: Transport) -> httpx.Client:
            self._transport = server.transport
            return original(self)

        monkeypatch.setattr(Transport, "_build_http_client", _build)
        return server

    return _serve


def _lf(*args: str, **kwargs):
    return runner.invoke(app, ["--no-color", "-q", *KEYS, *args], **kwargs)


# ---------------------------------------------------------------------------
# Root options
# ---------------------------------------------------------------------------


class TestRootOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"lf {__version__}" in result.output

    def test_help_lists_resource_groups(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for group in ["config", "traces", "sessions", "observations", "scores", "metrics", "prompts", "datasets"]:
            assert group in result.output

    def test_missing_credentials(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={"data": []}))
        result = runner.invoke(app, ["traces", "list"])
        assert isinstance(result.exception, ConfigurationError)
        assert "lf config setup" in str(result.exception)
        assert server.requests == []

    def test_unknown_format_is_rejected_before_requests(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={"data": []}))
        result = _lf("-f", "xml", "traces", "list")
        assert isinstance(result.exception, InvalidUsageError)
        assert server.requests == []

    def test_profile_credentials_are_used(self, serve, page_payload) -> None:
        set_profile("ci", ProfileEntry(public_key="pk-ci", secret_key="sk-ci", host="http://ci.local"))
        server = serve(lambda r: httpx.Response(200, json=page_payload([], total_pages=1)))

        result = runner.invoke(app, ["--profile", "ci", "-f", "json", "traces", "list"])
        assert result.exit_code == 0, result.output
        assert str(server.requests[0].url).startswith("http://ci.local/api/public/traces?")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRendering:
    def test_traces_list_json(self, serve, page_payload) -> None:
        traces = [{"id": "t1", "name": "chat"}, {"id": "t2", "name": "rag"}]
        server = serve(lambda r: httpx.Response(200, json=page_payload(traces, total_pages=1)))

        result = _lf("-f", "json", "traces", "list", "--tag", "prod", "--limit", "10")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == traces
        assert server.requests[0].url.params.multi_items() == [
            ("limit", "10"),
            ("page", "1"),
            ("tags", "prod"),
        ]

    def test_traces_list_table_by_default(self, serve, page_payload) -> None:
        serve(lambda r: httpx.Response(200, json=page_payload([{"id": "t1"}], total_pages=1)))
        result = _lf("traces", "list")
        assert result.exit_code == 0, result.output
        assert "│ id │" in result.stdout
        assert "│ t1 │" in result.stdout

    def test_empty_list(self, serve, page_payload) -> None:
        serve(lambda r: httpx.Response(200, json=page_payload([], total_pages=1)))
        result = _lf("traces", "list")
        assert result.exit_code == 0
        assert "No data to display" in result.stdout

    def test_csv_to_output_file(self, serve, page_payload, isolated_config: Path) -> None:
        serve(lambda r: httpx.Response(200, json=page_payload([{"id": "s1", "value": 0.5}], total_pages=1)))
        target = isolated_config / "scores.csv"

        result = _lf("-f", "csv", "-o", str(target), "scores", "list")
        assert result.exit_code == 0, result.output
        assert target.read_text() == "id,value\ns1,0.5\n"
        assert "s1" not in result.stdout

    def test_trace_with_observations(self, serve, page_payload) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/public/traces/t1":
                return httpx.Response(200, json={"id": "t1"})
            return httpx.Response(200, json=page_payload([{"id": "o1"}], total_pages=1))

        server = serve(handler)
        result = _lf("-f", "json", "traces", "get", "t1", "--with-observations")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"id": "t1", "observations": [{"id": "o1"}]}
        params = server.requests[1].url.params
        assert params["traceId"] == "t1"
        assert params["limit"] == "100"

    def test_session_with_traces(self, serve, page_payload) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/public/sessions/s1":
                return httpx.Response(200, json={"id": "s1"})
            return httpx.Response(200, json=page_payload([{"id": "t1"}], total_pages=1))

        server = serve(handler)
        result = _lf("-f", "json", "sessions", "show", "s1", "--with-traces")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["traces"] == [{"id": "t1"}]
        assert server.requests[1].url.params["sessionId"] == "s1"

    def test_metrics_query(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={"data": [{"name": "chat", "count_count": 4}]}))
        result = _lf(
            "-f", "markdown", "metrics", "query",
            "--view", "traces", "--measure", "count", "--aggregation", "count",
            "-d", "name",
        )
        assert result.exit_code == 0, result.output
        assert "| count_count | name |" in result.stdout
        assert "| 4 | chat |" in result.stdout
        assert json.loads(server.requests[0].content)["dimensions"] == [{"field": "name"}]


# ---------------------------------------------------------------------------
# Write operations
# ---------------------------------------------------------------------------


class TestWrites:
    def test_score_create_prints_json(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={"id": "sc1"}))
        result = _lf("scores", "create", "--name", "accuracy", "--value", "0.9", "--trace-id", "t1")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"id": "sc1"}
        assert json.loads(server.requests[0].content) == {
            "name": "accuracy",
            "value": 0.9,
            "traceId": "t1",
        }

    def test_categorical_score_value(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={"id": "sc2"}))
        result = _lf(
            "scores", "create", "--name", "tone", "--value", "friendly", "--data-type", "categorical",
        )
        assert result.exit_code == 0, result.output
        body = json.loads(server.requests[0].content)
        assert body["value"] == "friendly"
        assert body["dataType"] == "CATEGORICAL"

    def test_prompt_get_raw(self, serve) -> None:
        serve(lambda r: httpx.Response(200, json={"name": "p", "prompt": "Hello {{name}}"}))
        result = _lf("prompts", "get", "p", "--raw")
        assert result.exit_code == 0, result.output
        assert result.stdout == "Hello {{name}}\n"

    def test_create_text_prompt_from_stdin(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={"name": "p", "version": 1}))
        result = _lf(
            "-f", "json", "prompts", "create-text", "--name", "p", "--label", "staging",
            input="You are helpful.",
        )
        assert result.exit_code == 0, result.output
        request = server.requests[0]
        assert request.url.path == "/api/public/v2/prompts"
        body = json.loads(request.content)
        assert body["type"] == "text"
        assert body["prompt"] == "You are helpful."
        assert body["labels"] == ["staging"]

    def test_create_chat_prompt_rejects_non_array(self, serve, isolated_config: Path) -> None:
        server = serve(lambda r: httpx.Response(200, json={}))
        messages = isolated_config / "messages.json"
        messages.write_text('{"role": "system"}')

        result = _lf("prompts", "create-chat", "--name", "c", "--file", str(messages))
        assert isinstance(result.exception, InvalidUsageError)
        assert server.requests == []

    def test_dataset_item_create_rejects_bad_json(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={}))
        result = _lf("datasets", "item-create", "--dataset", "qa", "--input", "{not json")
        assert isinstance(result.exception, InvalidUsageError)
        assert server.requests == []

    def test_prompt_delete(self, serve) -> None:
        server = serve(lambda r: httpx.Response(204))
        result = _lf("prompts", "delete", "p", "--version", "2")
        assert result.exit_code == 0, result.output
        assert server.requests[0].method == "DELETE"
        assert server.requests[0].url.params["version"] == "2"


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


class TestConfigCommands:
    def test_set_tests_then_saves(self, serve) -> None:
        server = serve(lambda r: httpx.Response(200, json={"data": []}))
        result = runner.invoke(
            app,
            ["-q", "config", "set", "--profile", "dev",
             "--public-key", "pk-lf-1234567890", "--secret-key", "sk-lf-abcdefghij"],
        )
        assert result.exit_code == 0, result.output
        assert server.requests[0].url.params["limit"] == "1"

        entry = get_profile("dev")
        assert entry.public_key == "pk-lf-1234567890"
        assert entry.host == "https://cloud.langfuse.com"

    def test_set_does_not_save_rejected_keys(self, serve) -> None:
        serve(lambda r: httpx.Response(401))
        result = runner.invoke(
            app, ["-q", "config", "set", "--public-key", "pk", "--secret-key", "sk"],
        )
        assert isinstance(result.exception, AuthenticationError)
        assert get_profile("default") is None

    def test_setup_non_interactive_requires_keys(self, serve) -> None:
        result = runner.invoke(app, ["config", "setup", "--non-interactive"])
        assert isinstance(result.exception, ConfigurationError)
        assert "LANGFUSE_PUBLIC_KEY not set" in str(result.exception)

    def test_setup_interactive(self, serve) -> None:
        serve(lambda r: httpx.Response(200, json={"data": []}))
        result = runner.invoke(
            app,
            ["-q", "config", "setup"],
            input="work\npk-lf-work\nsk-lf-work\nhttp://self.hosted\n",
        )
        assert result.exit_code == 0, result.output
        entry = get_profile("work")
        assert (entry.public_key, entry.secret_key, entry.host) == (
            "pk-lf-work", "sk-lf-work", "http://self.hosted",
        )

    def test_show_masks_keys(self, isolated_config: Path) -> None:
        set_profile("default", ProfileEntry(public_key="pk-lf-1234567890", secret_key="sk-lf-abcdefghij"))
        result = runner.invoke(app, ["-f", "json", "config", "show"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "profile": "default",
            "public_key": "pk-lf-12********",
            "secret_key": "sk-lf-ab********",
            "host": "(default: https://cloud.langfuse.com)",
        }

    def test_show_unknown_profile(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "show", "--profile", "nope"])
        assert isinstance(result.exception, ConfigurationError)

    def test_list(self, isolated_config: Path) -> None:
        set_profile("prod", ProfileEntry(public_key="pk"))
        set_profile("dev", ProfileEntry(public_key="pk"))
        result = runner.invoke(app, ["config", "list"])
        assert result.exit_code == 0
        assert result.stdout == "dev\nprod\n"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


class TestMain:
    def _run_main(self, monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
        monkeypatch.setattr(sys, "argv", ["lf", "--no-color", *args])
        monkeypatch.setattr("lfcli.app._setup_signal_handlers", lambda: None)
        with pytest.raises(SystemExit) as exc_info:
            main()
        return exc_info.value.code

    def test_auth_failure_exit_code(self, serve, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        serve(lambda r: httpx.Response(401))
        assert self._run_main(monkeypatch, *KEYS, "traces", "get", "t1") == 3
        captured = capsys.readouterr()
        assert "Error: Authentication failed. Check your public and secret keys." in captured.err
        assert captured.out == ""

    @pytest.mark.parametrize(
        "status,code",
        [(404, 4), (429, 7), (500, 5)],
    )
    def test_status_exit_codes(self, serve, monkeypatch: pytest.MonkeyPatch, status: int, code: int) -> None:
        serve(lambda r: httpx.Response(status, text="nope"))
        assert self._run_main(monkeypatch, *KEYS, "scores", "get", "sc1") == code

    def test_missing_credentials_exit_code(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run_main(monkeypatch, "traces", "list") == 1

    def test_credentials_from_dotenv(
        self, serve, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, page_payload
    ) -> None:
        server = serve(lambda r: httpx.Response(200, json=page_payload([], total_pages=1)))
        (isolated_config / ".env").write_text(
            "LANGFUSE_PUBLIC_KEY=pk-dotenv\nLANGFUSE_SECRET_KEY=sk-dotenv\n"
        )
        # registered so the values load_dotenv writes are undone afterwards
        monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "")
        monkeypatch.delenv("LANGFUSE_PUBLIC_KEY")
        monkeypatch.setenv("LANGFUSE_SECRET_KEY", "")
        monkeypatch.delenv("LANGFUSE_SECRET_KEY")

        assert self._run_main(monkeypatch, "-q", "-f", "json", "traces", "list") == 0
        assert len(server.requests) == 1

    def test_unexpected_error_writes_crash_log(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        def _boom(ctx):
            raise RuntimeError("boom")

        monkeypatch.setattr("lfcli.commands.traces.open_client", _boom)
        assert self._run_main(monkeypatch, *KEYS, "traces", "list") == 1

        logs = list((isolated_config / "data" / "langfuse" / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "RuntimeError: boom" in logs[0].read_text()
        assert "Unexpected error" in capsys.readouterr().err
