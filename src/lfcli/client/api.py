"""Resource operations of the Langfuse public API.

:class:`LangfuseClient` adds one method per endpoint on top of
:class:`~lfcli.client.transport.Transport`. Every method is either a single
transport call or a single :func:`~lfcli.client.pagination.paginate` walk;
none of them reshapes the records the server returns.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union
from urllib.parse import quote

from lfcli.client.pagination import paginate
from lfcli.client.transport import ApiVersion, Transport
from lfcli.models import (
    ChatPromptCreate,
    DatasetCreate,
    DatasetItemCreate,
    MetricsQuery,
    PromptLabelsUpdate,
    ScoreCreate,
    TextPromptCreate,
)


def _seg(value: Union[str, int]) -> str:
    """Percent-encode a single path segment."""
    return quote(str(value), safe="")


class LangfuseClient(Transport):
    """Typed entry points for every supported endpoint.

    Example::

        with LangfuseClient(config) as client:
            traces = client.list_traces(user_id="u-1", limit=20)
    """

    # --- Traces ---

    def list_traces(
        self,
        name: Optional[str] = None,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        from_timestamp: Optional[str] = None,
        to_timestamp: Optional[str] = None,
        limit: int = 50,
        page: int = 1,
    ) -> list[Any]:
        filters = [
            ("name", name),
            ("userId", user_id),
            ("sessionId", session_id),
            ("fromTimestamp", from_timestamp),
            ("toTimestamp", to_timestamp),
            ("tags", list(tags) if tags else None),
        ]
        return paginate(self, "/traces", filters, limit, page)

    def get_trace(self, trace_id: str) -> Any:
        return self.get(f"/traces/{_seg(trace_id)}", expect="object")

    # --- Sessions ---

    def list_sessions(
        self,
        from_timestamp: Optional[str] = None,
        to_timestamp: Optional[str] = None,
        limit: int = 50,
        page: int = 1,
    ) -> list[Any]:
        filters = [("fromTimestamp", from_timestamp), ("toTimestamp", to_timestamp)]
        return paginate(self, "/sessions", filters, limit, page)

    def get_session(self, session_id: str) -> Any:
        return self.get(f"/sessions/{_seg(session_id)}", expect="object")

    # --- Observations ---

    def list_observations(
        self,
        trace_id: Optional[str] = None,
        name: Optional[str] = None,
        observation_type: Optional[str] = None,
        user_id: Optional[str] = None,
        from_start_time: Optional[str] = None,
        to_start_time: Optional[str] = None,
        limit: int = 50,
        page: int = 1,
    ) -> list[Any]:
        filters = [
            ("traceId", trace_id),
            ("name", name),
            ("type", observation_type),
            ("userId", user_id),
            ("fromStartTime", from_start_time),
            ("toStartTime", to_start_time),
        ]
        return paginate(self, "/observations", filters, limit, page)

    def get_observation(self, observation_id: str) -> Any:
        return self.get(f"/observations/{_seg(observation_id)}", expect="object")

    # --- Scores ---

    def list_scores(
        self,
        name: Optional[str] = None,
        from_timestamp: Optional[str] = None,
        to_timestamp: Optional[str] = None,
        limit: int = 50,
        page: int = 1,
    ) -> list[Any]:
        filters = [
            ("name", name),
            ("fromTimestamp", from_timestamp),
            ("toTimestamp", to_timestamp),
        ]
        return paginate(self, "/scores", filters, limit, page)

    def get_score(self, score_id: str) -> Any:
        return self.get(f"/scores/{_seg(score_id)}", expect="object")

    def create_score(self, score: ScoreCreate) -> Any:
        return self.post("/scores", score.to_wire())

    # --- Metrics ---

    def query_metrics(self, query: MetricsQuery) -> list[Any]:
        """Run a metrics query and return its ``data`` rows."""
        result = self.post("/metrics", query.to_wire(), expect="object")
        data = result.get("data")
        return data if isinstance(data, list) else []

    # --- Prompts (v2) ---

    def list_prompts(
        self,
        name: Optional[str] = None,
        label: Optional[str] = None,
        tag: Optional[str] = None,
        limit: int = 50,
        page: int = 1,
    ) -> list[Any]:
        filters = [("name", name), ("label", label), ("tag", tag)]
        return paginate(self, "/prompts", filters, limit, page, version=ApiVersion.V2)

    def get_prompt(
        self,
        name: str,
        version: Optional[int] = None,
        label: Optional[str] = None,
    ) -> Any:
        params = []
        if version is not None:
            params.append(("version", str(version)))
        if label is not None:
            params.append(("label", label))
        return self.get_v2(f"/prompts/{_seg(name)}", params=params, expect="object")

    def create_prompt(self, prompt: Union[TextPromptCreate, ChatPromptCreate]) -> Any:
        return self.post_v2("/prompts", prompt.to_wire())

    def update_prompt_labels(self, name: str, version: int, labels: Sequence[str]) -> Any:
        body = PromptLabelsUpdate(new_labels=list(labels)).to_wire()
        return self.patch_v2(f"/prompts/{_seg(name)}/versions/{_seg(version)}", body)

    def delete_prompt(
        self,
        name: str,
        version: Optional[int] = None,
        label: Optional[str] = None,
    ) -> None:
        """Delete a prompt, or only the versions matching *version* / *label*."""
        params = []
        if version is not None:
            params.append(("version", str(version)))
        if label is not None:
            params.append(("label", label))
        self.delete_v2(f"/prompts/{_seg(name)}", params=params)

    # --- Datasets ---

    def list_datasets(self, limit: int = 50, page: int = 1) -> list[Any]:
        return paginate(self, "/datasets", None, limit, page, version=ApiVersion.V2)

    def get_dataset(self, name: str) -> Any:
        return self.get_v2(f"/datasets/{_seg(name)}", expect="object")

    def create_dataset(self, dataset: DatasetCreate) -> Any:
        return self.post_v2("/datasets", dataset.to_wire())

    def list_dataset_items(
        self,
        dataset_name: Optional[str] = None,
        limit: int = 50,
        page: int = 1,
    ) -> list[Any]:
        return paginate(self, "/dataset-items", [("datasetName", dataset_name)], limit, page)

    def get_dataset_item(self, item_id: str) -> Any:
        return self.get(f"/dataset-items/{_seg(item_id)}", expect="object")

    def create_dataset_item(self, item: DatasetItemCreate) -> Any:
        return self.post("/dataset-items", item.to_wire())

    def list_dataset_runs(self, dataset_name: str, limit: int = 50, page: int = 1) -> list[Any]:
        return paginate(self, f"/datasets/{_seg(dataset_name)}/runs", None, limit, page)

    def get_dataset_run(self, dataset_name: str, run_name: str) -> Any:
        return self.get(
            f"/datasets/{_seg(dataset_name)}/runs/{_seg(run_name)}", expect="object",
        )

    # --- Health ---

    def test_connection(self) -> bool:
        """Issue a minimal authenticated request.

        Returns:
            ``True`` when the credentials are accepted. Any failure is raised
            as the corresponding typed error.
        """
        self.get("/traces", params=[("limit", "1")])
        return True
