"""Canonical Pydantic models shared across all lfcli modules.

Every other module imports its data shapes from here. The models fall into
three groups:

**Configuration models** -- the persisted profile file and the resolved
runtime configuration:
    :class:`ProfileEntry`, :class:`ConfigFile`, :class:`Config` and the
    immutable :class:`Credentials` tuple handed to the transport.

**Wire models** -- pagination envelopes read from list endpoints and the
request bodies posted to create/update endpoints:
    :class:`PageMeta`, :class:`PageEnvelope`, :class:`ScoreCreate`,
    :class:`ChatMessage`, :class:`TextPromptCreate`,
    :class:`ChatPromptCreate`, :class:`PromptLabelsUpdate`,
    :class:`DatasetCreate`, :class:`DatasetItemCreate` and
    :class:`MetricsQuery`.

**CLI choices** -- string enums used as Typer option types.

Records returned by the API (traces, sessions, scores, ...) are
*not* modelled: they stay plain JSON values so the renderers can handle any
shape the server sends.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lfcli.exceptions import ConfigurationError

DEFAULT_HOST = "https://cloud.langfuse.com"
DEFAULT_PROFILE = "default"


# --- Configuration ---


class Credentials(BaseModel):
    """The resolved ``(public_key, secret_key, host)`` triple.

    Immutable once built. Produced by :meth:`Config.credentials` and
    passed explicitly into :class:`~lfcli.client.transport.Transport`;
    the transport never reads environment variables or files itself.
    """

    model_config = ConfigDict(frozen=True)

    public_key: str
    secret_key: str
    host: str

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class ProfileEntry(BaseModel):
    """One named profile stored in the profile file."""

    public_key: Optional[str] = None
    secret_key: Optional[str] = None
    host: Optional[str] = None


class ConfigFile(BaseModel):
    """Structure of ``config.yml``: a mapping of profile name to entry."""

    profiles: dict[str, ProfileEntry] = Field(default_factory=dict)


class Config(BaseModel):
    """Effective configuration after merging CLI flags, env vars and the profile file.

    Built by :func:`~lfcli.config.resolve_config`. Either key may still be
    missing at this point; :meth:`is_valid` tells the command layer whether
    it is safe to construct a client.
    """

    public_key: Optional[str] = None
    secret_key: Optional[str] = None
    host: str = DEFAULT_HOST
    profile: str = DEFAULT_PROFILE

    def is_valid(self) -> bool:
        """Return ``True`` when both keys and the host are present and non-empty."""
        return bool(self.public_key) and bool(self.secret_key) and bool(self.host)

    def credentials(self) -> Credentials:
        """Return the immutable credential tuple.

        Raises:
            ConfigurationError: If a key or the host is missing.
        """
        if not self.public_key:
            raise ConfigurationError("Public key is required")
        if not self.secret_key:
            raise ConfigurationError("Secret key is required")
        if not self.host:
            raise ConfigurationError("Host is required")
        return Credentials(
            public_key=self.public_key,
            secret_key=self.secret_key,
            host=self.host,
        )


# --- Pagination envelope ---


class PageMeta(BaseModel):
    """Pagination metadata returned next to ``data`` by list endpoints.

    Every field is optional: servers may send a partial object or none at all.
    """

    model_config = ConfigDict(populate_by_name=True)

    page: Optional[int] = None
    limit: Optional[int] = None
    total_items: Optional[int] = Field(default=None, alias="totalItems")
    total_pages: Optional[int] = Field(default=None, alias="totalPages")


class PageEnvelope(BaseModel):
    """A list response: ordered records plus optional :class:`PageMeta`."""

    data: list[Any]
    meta: Optional[PageMeta] = None


# --- Request bodies ---


class _WireModel(BaseModel):
    """Base for request bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialise for the request body, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScoreCreate(_WireModel):
    """Body for ``POST /scores``."""

    name: str
    value: Union[float, str]
    trace_id: Optional[str] = None
    observation_id: Optional[str] = None
    session_id: Optional[str] = None
    data_type: Optional[str] = None
    comment: Optional[str] = None


class ChatMessage(_WireModel):
    """A single message of a chat prompt."""

    role: str
    content: str


class TextPromptCreate(_WireModel):
    """Body for ``POST /v2/prompts`` creating a text prompt version."""

    type: Literal["text"] = "text"
    name: str
    prompt: str
    labels: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    config: Optional[Any] = None
    commit_message: Optional[str] = None


class ChatPromptCreate(_WireModel):
    """Body for ``POST /v2/prompts`` creating a chat prompt version."""

    type: Literal["chat"] = "chat"
    name: str
    prompt: list[ChatMessage]
    labels: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    config: Optional[Any] = None
    commit_message: Optional[str] = None


class PromptLabelsUpdate(_WireModel):
    """Body for ``PATCH /v2/prompts/{name}/versions/{version}``."""

    new_labels: list[str]


class DatasetCreate(_WireModel):
    """Body for ``POST /v2/datasets``."""

    name: str
    description: Optional[str] = None
    metadata: Optional[Any] = None


class DatasetItemCreate(_WireModel):
    """Body for ``POST /dataset-items``."""

    dataset_name: str
    input: Any
    expected_output: Optional[Any] = None
    metadata: Optional[Any] = None
    source_trace_id: Optional[str] = None
    source_observation_id: Optional[str] = None


class MetricsQuery(_WireModel):
    """Body for ``POST /metrics``.

    ``dimensions`` holds plain field names; they are sent as
    ``[{"field": name}, ...]``.
    """

    view: str
    measure: str
    aggregation: str
    dimensions: Optional[list[str]] = None
    from_timestamp: Optional[str] = None
    to_timestamp: Optional[str] = None
    granularity: Optional[str] = None
    limit: Optional[int] = None

    def to_wire(self) -> dict[str, Any]:
        body = super().to_wire()
        if self.dimensions is not None:
            body["dimensions"] = [{"field": name} for name in self.dimensions]
        return body


# --- CLI choices ---


class ObservationType(str, enum.Enum):
    """Observation kinds accepted by ``--type``."""

    GENERATION = "GENERATION"
    SPAN = "SPAN"
    EVENT = "EVENT"


class ScoreDataType(str, enum.Enum):
    """Score data types accepted by ``--data-type``."""

    NUMERIC = "NUMERIC"
    CATEGORICAL = "CATEGORICAL"
    BOOLEAN = "BOOLEAN"


class MetricsView(str, enum.Enum):
    TRACES = "traces"
    OBSERVATIONS = "observations"


class Measure(str, enum.Enum):
    COUNT = "count"
    LATENCY = "latency"
    INPUT_TOKENS = "inputTokens"
    OUTPUT_TOKENS = "outputTokens"
    TOTAL_TOKENS = "totalTokens"
    INPUT_COST = "inputCost"
    OUTPUT_COST = "outputCost"
    TOTAL_COST = "totalCost"


class Aggregation(str, enum.Enum):
    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    P50 = "p50"
    P95 = "p95"
    P99 = "p99"
    HISTOGRAM = "histogram"


class TimeGranularity(str, enum.Enum):
    AUTO = "auto"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
